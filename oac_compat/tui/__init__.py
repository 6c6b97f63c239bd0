from oac_compat.tui.renderers import CompatConsoleUI

__all__ = ["CompatConsoleUI"]
