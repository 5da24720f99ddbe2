import pytest
from google.cloud import pubsub_v1

from topic_errors import ServiceError


class FakeTopicService:
    """
    In-memory stand-in for the Pub/Sub admin API, recording every call.
    """
    def __init__(self, project_id: str = 'p', existing=(), exists_error=None, create_error=None, metadata_error=None):
        self.project_id = project_id
        self.existing = set(existing)
        self.exists_error = exists_error
        self.create_error = create_error
        self.metadata_error = metadata_error
        self.exists_calls = []
        self.create_calls = []
        self.metadata_calls = []

    def topic_path(self, topic_name: str) -> str:
        return f'projects/{self.project_id}/topics/{topic_name}'

    def topic_exists(self, topic_name):
        self.exists_calls.append(topic_name)
        if self.exists_error:
            raise ServiceError(self.exists_error)
        if topic_name not in self.existing:
            return None
        return pubsub_v1.types.Topic(name=self.topic_path(topic_name))

    def create_topic(self, topic_name):
        self.create_calls.append(topic_name)
        if self.create_error:
            raise ServiceError(self.create_error)
        self.existing.add(topic_name)
        return pubsub_v1.types.Topic(name=self.topic_path(topic_name))

    def set_topic_metadata(self, topic, metadata):
        self.metadata_calls.append((topic.name, metadata))
        if self.metadata_error:
            raise ServiceError(self.metadata_error)


@pytest.fixture
def fake_service():
    return FakeTopicService()


def read_outputs(path) -> dict[str, str]:
    """
    Parses a runner output file written with `name<<delimiter` blocks.
    """
    outputs = {}
    lines = iter(path.read_text(encoding='utf-8').splitlines())
    for line in lines:
        name, delimiter = line.split('<<', 1)
        values = []
        for value_line in lines:
            if value_line == delimiter:
                break
            values.append(value_line)
        outputs[name] = '\n'.join(values)
    return outputs
