import json
import re

from topic_config import RetentionDuration
from topic_errors import InvalidArgument

# Starts with a letter, 3-255 characters in total
TOPIC_NAME_PATTERN = re.compile(r'[a-zA-Z][a-zA-Z0-9._~+%-]{2,254}')
DURATION_PATTERN = re.compile(r'(\d+)([dhms])', re.ASCII)

SECONDS_PER_UNIT = {
    'd': 86400,
    'h': 3600,
    'm': 60,
    's': 1,
}


def validate_topic_name(topic_name: str) -> None:
    if not TOPIC_NAME_PATTERN.fullmatch(topic_name):
        raise InvalidArgument(
            f'Invalid topic name: "{topic_name}". '
            'Topic names must start with a letter and be 3-255 characters long, '
            'containing only letters, numbers, and ._~+%-'
        )


def parse_labels(labels_json: str) -> dict[str, str]:
    """
    Parses a flat JSON object whose values are all strings.

    :raises InvalidArgument: on malformed JSON, a non-object document or a non-string value.
    """
    try:
        parsed = json.loads(labels_json)
    except (json.JSONDecodeError, RecursionError) as e:
        raise InvalidArgument(f'Failed to parse labels: {e}') from e

    if not isinstance(parsed, dict):
        raise InvalidArgument(f'Failed to parse labels: expected a JSON object, got {_json_type(parsed)}')

    labels = {}
    for key, value in parsed.items():
        if not isinstance(value, str):
            raise InvalidArgument(
                f'Failed to parse labels: Label "{key}" must be a string, got {_json_type(value)}. '
                'All labels must be strings.'
            )
        labels[key] = value
    return labels


def parse_duration(duration: str) -> RetentionDuration:
    match = DURATION_PATTERN.fullmatch(duration)
    if not match:
        raise InvalidArgument(
            f'Invalid duration format: "{duration}". '
            'Use format like "7d" (days), "600s" (seconds), "1h" (hours), or "30m" (minutes)'
        )
    value, unit = match.groups()
    return RetentionDuration(seconds=int(value) * SECONDS_PER_UNIT[unit])


def parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized == 'true':
        return True
    if normalized == 'false':
        return False
    raise InvalidArgument(f'Input "{name}" must be "true" or "false", got "{value}"')


def _json_type(value: object) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    return 'object'
