"""
glyphconst.base.imports - supporting functions for optional imports

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from importlib import import_module


def safe_import(module_name, name=None):
    """Wrapper for importing external modules and dealing with their errors."""
    item = None
    try:
        module = import_module(module_name)
    except ImportError as e:
        logging.debug('Could not import module `%s`: %s', module_name, e)
    except Exception as e:
        logging.warning('Error while importing module `%s`: %s', module_name, e)
    else:
        if name:
            item = getattr(module, name)
        else:
            item = module
    return item
