from datetime import datetime
from typing import Any
from collections.abc import Callable


# Type aliases for Python dictionaries
type JSONDocument = dict[str, Any]
type AppConfig = dict[str, Any]

# Type aliases for callables
type Clock = Callable[[], datetime]
type ChangeListener = Callable[[], None]
type RedirectTransport = Callable[[str], Any]
