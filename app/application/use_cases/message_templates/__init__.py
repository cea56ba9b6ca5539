"""Message template use cases."""

from .create_message_template import create_message_template
from .get_message_template import get_message_template
from .list_message_templates import list_message_templates
from .template_status import get_template_status
from .update_message_template import update_message_template

__all__ = [
    "create_message_template",
    "get_message_template",
    "get_template_status",
    "list_message_templates",
    "update_message_template",
]
