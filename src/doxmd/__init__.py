from .commands import process_comment, process_comments
from .converter import transform
from .errors import AttributeListError, DoxmdError
from .version import __version__

__all__ = [
    "AttributeListError",
    "DoxmdError",
    "__version__",
    "process_comment",
    "process_comments",
    "transform",
]
