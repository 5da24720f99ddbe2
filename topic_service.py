import logging
from typing import Protocol

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import pubsub_v1
from google.protobuf import duration_pb2, field_mask_pb2

from topic_config import TopicMetadata
from topic_errors import ServiceError

# Everything the API client can raise for a failed call: transport, permission, quota, credentials
API_EXCEPTIONS = (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError)


class TopicService(Protocol):
    """
    The three Pub/Sub operations needed to create a topic.
    Topic names are bare ids; the returned topic handles carry the fully-qualified `name`.
    """
    def topic_exists(self, topic_name: str) -> pubsub_v1.types.Topic | None: ...

    def create_topic(self, topic_name: str) -> pubsub_v1.types.Topic: ...

    def set_topic_metadata(self, topic: pubsub_v1.types.Topic, metadata: TopicMetadata) -> None: ...


class PubSubTopicService:
    def __init__(self, client: pubsub_v1.PublisherClient, project_id: str):
        self.logger = logging.getLogger('PubSubTopicService')
        self.client = client
        self.project_id = project_id

    def topic_exists(self, topic_name: str) -> pubsub_v1.types.Topic | None:
        topic_path = self.client.topic_path(self.project_id, topic_name)
        try:
            return self.client.get_topic(request={'topic': topic_path})
        except google_exceptions.NotFound:
            self.logger.debug(f'Topic not found: {topic_path}')
            return None
        except API_EXCEPTIONS as e:
            raise ServiceError(str(e)) from e

    def create_topic(self, topic_name: str) -> pubsub_v1.types.Topic:
        topic_path = self.client.topic_path(self.project_id, topic_name)
        try:
            return self.client.create_topic(request={'name': topic_path})
        except API_EXCEPTIONS as e:
            raise ServiceError(str(e)) from e

    def set_topic_metadata(self, topic: pubsub_v1.types.Topic, metadata: TopicMetadata) -> None:
        update_mask = field_mask_pb2.FieldMask(paths=metadata.update_paths())
        try:
            request = {
                'topic': self._topic_with_metadata(topic.name, metadata),
                'update_mask': update_mask,
            }
            self.client.update_topic(request=request)
        except API_EXCEPTIONS as e:
            raise ServiceError(str(e)) from e
        except ValueError as e:
            # protobuf rejects durations outside the int64 range
            raise ServiceError(f'Invalid topic metadata: {e}') from e
        self.logger.debug(f'Updated {list(update_mask.paths)} on {topic.name}')

    def _topic_with_metadata(self, topic_path: str, metadata: TopicMetadata) -> pubsub_v1.types.Topic:
        fields = {'name': topic_path}
        if metadata.labels is not None:
            fields['labels'] = metadata.labels
        if metadata.kms_key_name is not None:
            fields['kms_key_name'] = metadata.kms_key_name
        if metadata.message_retention_duration is not None:
            fields['message_retention_duration'] = duration_pb2.Duration(
                seconds=metadata.message_retention_duration.seconds,
                nanos=metadata.message_retention_duration.nanos,
            )
        return pubsub_v1.types.Topic(**fields)
