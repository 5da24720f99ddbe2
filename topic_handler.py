import logging

from topic_config import TopicConfig, TopicExistence, TopicMetadata, TopicResult
from topic_errors import AlreadyExists, ServiceError, TopicError
from topic_service import TopicService
from validators import parse_duration, parse_labels, validate_topic_name


class TopicHandler:
    def __init__(self, service: TopicService):
        self.logger = logging.getLogger('TopicHandler')
        self.service = service

    def create_topic(self, config: TopicConfig) -> TopicResult:
        """
        Creates the topic described by `config`, or reports the existing one when
        `skip_if_exists` is set. Never raises for validation, duplicate or API errors:
        they come back as `TopicResult(success=False, error=...)`.

        An existing topic is left untouched: metadata is only applied to a topic
        created by this call.

        Caution: if applying metadata fails, the result is a failure even though the
        topic has already been created (without the requested metadata).
        """
        try:
            validate_topic_name(config.topic_name)
            self.logger.info(f'Topic name: {config.topic_name}')

            existence = self.check_topic_exists(config.topic_name)
            if existence.exists:
                return self._handle_existing_topic(config, existence)

            self.logger.info('Creating new topic...')
            topic = self.service.create_topic(config.topic_name)
            self.logger.info('✓ Topic created')

            if config.has_metadata:
                self._apply_metadata(topic, config)

            self.logger.info('✓ Topic created successfully')
            self.logger.info(f'Topic name: {topic.name}')
            return TopicResult.created_topic(topic.name)
        except TopicError as e:
            self.logger.error(f'Failed to create topic: {e}')
            return TopicResult.failed(str(e))

    def check_topic_exists(self, topic_name: str) -> TopicExistence:
        # a failed query counts as "does not exist"
        try:
            topic = self.service.topic_exists(topic_name)
        except ServiceError as e:
            self.logger.warning(f'Failed to check if topic exists: {e}')
            return TopicExistence(exists=False)

        if topic is None:
            self.logger.info(f'Topic does not exist: {topic_name}')
            return TopicExistence(exists=False)
        return TopicExistence(exists=True, topic=topic)

    def _handle_existing_topic(self, config: TopicConfig, existence: TopicExistence) -> TopicResult:
        if not config.skip_if_exists:
            raise AlreadyExists(
                f'Topic "{config.topic_name}" already exists. '
                'Set skip-if-exists=true to succeed when topic exists.'
            )
        full_name = existence.topic.name
        self.logger.info(f'✓ Topic already exists: {full_name}')
        self.logger.info('Skip-if-exists is enabled, treating as success')
        return TopicResult.existing_topic(full_name)

    def _apply_metadata(self, topic, config: TopicConfig) -> None:
        metadata = self.build_metadata(config)
        self.service.set_topic_metadata(topic, metadata)
        self.logger.info('✓ Metadata updated')

    def build_metadata(self, config: TopicConfig) -> TopicMetadata:
        labels = None
        if config.labels:
            labels = parse_labels(config.labels)
            self.logger.info(f'Setting labels: {len(labels)} label(s)')

        # passed through as-is, no format check
        kms_key_name = config.kms_key_name or None
        if kms_key_name:
            self.logger.info(f'Setting KMS encryption: {kms_key_name}')

        retention = None
        if config.message_retention_duration:
            retention = parse_duration(config.message_retention_duration)
            self.logger.info(f'Setting message retention: {config.message_retention_duration}')

        return TopicMetadata(labels=labels, kms_key_name=kms_key_name, message_retention_duration=retention)
