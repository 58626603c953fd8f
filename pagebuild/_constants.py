"""Common literal values used across pagebuild.

These constants keep filenames and markers centralized so the loaders, the
generator, and tests can import the same values without drifting. Intended for
internal use within the pagebuild package.

Examples
--------
>>> from pagebuild import _constants
>>> _constants.OUTPUT_SUFFIX
'.html'
>>> _constants.CONFIG_GLOB
'*.yml'
"""

OUTPUT_SUFFIX = ".html"
CONFIG_GLOB = "*.yml"
BASE_CONFIG_NAME = "base"
DESCENDING_MARKER = "-"
DEFAULT_CUT_TAG = "<!-- cut -->"
