from .listeners import BaseListener, ListenerCollection, LoggingListener, ResultsRecorder

__all__ = [
    "BaseListener",
    "ListenerCollection",
    "LoggingListener",
    "ResultsRecorder",
]
