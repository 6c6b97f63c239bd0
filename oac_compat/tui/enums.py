from enum import Enum

from oac_compat.models import DocumentStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    DIM = "dim"
    WHITE = "white"


DOCUMENT_STATUS_STYLE = {
    DocumentStatus.OK: UIStyle.GREEN.value,
    DocumentStatus.WARNING: UIStyle.YELLOW.value,
    DocumentStatus.ERROR: UIStyle.RED.value,
}
