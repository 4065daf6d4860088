"""
glyphconst - generate glyph constants from icon fonts

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import sys

from .scripts.generate import main


sys.exit(main())
