import logging
import sys
from typing import Callable, Mapping

from google.cloud import pubsub_v1

from action_io import ActionInputs, ActionOutputs, configure_logging, load_topic_inputs
from topic_config import TopicResult
from topic_errors import TopicError
from topic_handler import TopicHandler
from topic_service import PubSubTopicService

logger = logging.getLogger('CreateTopic')


def run(
    environ: Mapping[str, str] | None = None,
    client_factory: Callable[[], pubsub_v1.PublisherClient] = pubsub_v1.PublisherClient,
) -> int:
    outputs = ActionOutputs(environ)
    try:
        project_id, config = load_topic_inputs(ActionInputs(environ))
    except TopicError as e:
        return outputs.set_failed(str(e))

    logger.info('GCP Pub/Sub Create Topic')
    logger.info(f'Project ID: {project_id}')
    logger.info(f'Topic: {config.topic_name}')

    try:
        with client_factory() as client:
            topic_handler = TopicHandler(PubSubTopicService(client, project_id))
            result = topic_handler.create_topic(config)
    except Exception as e:
        logger.exception('Unexpected error creating topic')
        result = TopicResult.failed(str(e))

    return outputs.report_result(result)


def main() -> None:
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
