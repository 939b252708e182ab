"""Common literal values used across rho_pages.

These constants keep fence markers, placeholder tokens, and output filenames
centralized so the parser, compositor, layout provider, and tests can import
the same values without drifting. Intended for internal use within the
rho_pages package.

Examples
--------
>>> from rho_pages import _constants
>>> _constants.BODY_PLACEHOLDER
'{{__body}}'
>>> _constants.OUTPUT_FILENAME
'index.html'
"""

FRONTMATTER_FENCE = "+++"
BODY_PLACEHOLDER = "{{__body}}"
OUTPUT_FILENAME = "index.html"
INDEX_STEM = "index"
DEFAULT_CONFIG_FILENAME = "rho.yaml"
