from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TopicConfig:
    topic_name: str
    skip_if_exists: bool = False
    labels: str | None = None # JSON object as text
    kms_key_name: str | None = None
    message_retention_duration: str | None = None

    @property
    def has_metadata(self) -> bool:
        return bool(self.labels or self.kms_key_name or self.message_retention_duration)


@dataclass(frozen=True)
class RetentionDuration:
    """
    Whole-second duration. `nanos` mirrors the shape of google.protobuf.Duration
    but is never populated from input: only integer magnitudes are parsed.
    """
    seconds: int
    nanos: int = 0


@dataclass(frozen=True)
class TopicMetadata:
    labels: dict[str, str] | None = None
    kms_key_name: str | None = None
    message_retention_duration: RetentionDuration | None = None

    def update_paths(self) -> list[str]:
        paths = []
        if self.labels is not None:
            paths.append('labels')
        if self.kms_key_name is not None:
            paths.append('kms_key_name')
        if self.message_retention_duration is not None:
            paths.append('message_retention_duration')
        return paths


@dataclass(frozen=True)
class TopicExistence:
    exists: bool
    topic: Any = None # handle returned by the topic service, only set when exists


@dataclass(frozen=True)
class TopicResult:
    success: bool
    topic_name: str | None = None
    created: bool | None = None
    error: str | None = None

    @classmethod
    def created_topic(cls, topic_name: str) -> 'TopicResult':
        return cls(success=True, topic_name=topic_name, created=True)

    @classmethod
    def existing_topic(cls, topic_name: str) -> 'TopicResult':
        return cls(success=True, topic_name=topic_name, created=False)

    @classmethod
    def failed(cls, error: str) -> 'TopicResult':
        return cls(success=False, error=error)
