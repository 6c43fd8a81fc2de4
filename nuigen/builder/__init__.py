"""nui-gen builders.

Key classes:
    NuiGenerator        - Nuxt-UI-style wrapper components from docs sections
    IconifyRefactorer   - shadcn-vue components rewritten to Iconify icons
"""

from .iconify import IconifyRefactorer
from .nui import NuiGenerator

__all__ = [
    "IconifyRefactorer",
    "NuiGenerator",
]
