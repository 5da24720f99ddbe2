class TopicError(Exception):
    """
    Base class for errors raised while creating a topic.
    """


class InvalidArgument(TopicError):
    pass


class AlreadyExists(TopicError):
    pass


class ServiceError(TopicError):
    """
    Failure reported by the Pub/Sub API. The message is the API's own message.
    """
