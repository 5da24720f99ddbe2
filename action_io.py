import logging
import os
import sys
import uuid
from typing import Mapping

from topic_config import TopicConfig, TopicResult
from topic_errors import InvalidArgument
from validators import parse_bool

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def escape_data(value: str) -> str:
    """
    Escapes a value for a workflow command (`::error::<value>`), as the runner expects.
    """
    return value.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


class WorkflowCommandFormatter(logging.Formatter):
    """
    Renders warnings and errors as runner annotations, everything else with the regular format.
    """
    COMMANDS = {
        logging.WARNING: 'warning',
        logging.ERROR: 'error',
        logging.CRITICAL: 'error',
    }

    def format(self, record: logging.LogRecord) -> str:
        command = self.COMMANDS.get(record.levelno)
        if command is None:
            return super().format(record)
        message = record.getMessage()
        if record.exc_info:
            message = f'{message}\n{self.formatException(record.exc_info)}'
        return f'::{command}::{escape_data(message)}'


def resolve_log_level(level: str | None) -> str:
    """
    Returns the upper-cased level name, or INFO when `level` is empty or not a logging level.
    """
    name = (level or 'INFO').strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return 'INFO'


def configure_logging(level: str | None = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(WorkflowCommandFormatter(LOG_FORMAT))
    requested = level or os.environ.get('LOG_LEVEL')
    resolved = resolve_log_level(requested)
    logging.basicConfig(level=resolved, handlers=[handler])
    if requested and requested.strip() and requested.strip().upper() != resolved:
        logging.getLogger('ActionIO').warning(f'Unknown log level "{requested}", using {resolved}')


class ActionInputs:
    """
    Reads step inputs the way the runner passes them: `INPUT_<NAME>` environment variables.
    """
    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def get_input(self, name: str, required: bool = False, default: str = '') -> str:
        value = self.environ.get(f'INPUT_{name.replace(" ", "_").upper()}', '').strip()
        if required and not value:
            raise InvalidArgument(f'Input required and not supplied: {name}')
        return value or default

    def get_optional_input(self, name: str) -> str | None:
        return self.get_input(name) or None

    def get_boolean_input(self, name: str, default: str = 'false') -> bool:
        return parse_bool(name, self.get_input(name, default=default))


def load_topic_inputs(inputs: ActionInputs) -> tuple[str, TopicConfig]:
    project_id = inputs.get_input('project-id', required=True)
    config = TopicConfig(
        topic_name=inputs.get_input('topic-name', required=True),
        skip_if_exists=inputs.get_boolean_input('skip-if-exists'),
        labels=inputs.get_optional_input('labels'),
        kms_key_name=inputs.get_optional_input('kms-key-name'),
        message_retention_duration=inputs.get_optional_input('message-retention-duration'),
    )
    return project_id, config


class ActionOutputs:
    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.logger = logging.getLogger('ActionOutputs')
        self.environ = os.environ if environ is None else environ

    def set_output(self, name: str, value: str) -> None:
        """
        Appends the output to the `GITHUB_OUTPUT` file. Without that file, falls back to the
        legacy, deprecated `::set-output` command that older runners still read from stdout.
        """
        output_file = self.environ.get('GITHUB_OUTPUT')
        if not output_file:
            print(f'::set-output name={name}::{escape_data(value)}')
            return
        delimiter = f'ghadelimiter_{uuid.uuid4()}'
        with open(output_file, 'a', encoding='utf-8') as f:
            f.write(f'{name}<<{delimiter}\n{value}\n{delimiter}\n')

    def set_failed(self, message: str) -> int:
        print(f'::error::{escape_data(message)}')
        return 1

    def report_result(self, result: TopicResult) -> int:
        """
        Publishes the outputs of a successful run, or fails the step. Returns the exit code.
        """
        if not result.success:
            return self.set_failed(result.error or 'Failed to create topic')

        if result.topic_name:
            self.set_output('topic-name', result.topic_name)
        if result.created is not None:
            self.set_output('created', str(result.created).lower())

        self.logger.info('')
        self.logger.info('=' * 50)
        if result.created:
            self.logger.info('Topic created successfully')
        else:
            self.logger.info('Topic already exists (skip-if-exists enabled)')
        if result.topic_name:
            self.logger.info(f'Topic: {result.topic_name}')
        self.logger.info('=' * 50)
        return 0
