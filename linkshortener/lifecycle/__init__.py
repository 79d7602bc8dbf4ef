from linkshortener.lifecycle.engine import LifecycleEngine, LinkState
from linkshortener.lifecycle.notifications import Notifier, ConsoleNotifier
from linkshortener.lifecycle.scheduler import build_scheduler


__all__ = [
    'LifecycleEngine',
    'LinkState',
    'Notifier',
    'ConsoleNotifier',
    'build_scheduler',
]
