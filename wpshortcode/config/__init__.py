from .main import scriptPath
from .registry import ShortcodeRegistry
