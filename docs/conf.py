# sphinx-apidoc -o . ../src/bninfer
# sphinx-build -b html . _build/html

import sys
import os

sys.path.insert(0, os.path.abspath('../src'))

project = 'bn-inference'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
]

autodoc_typehints = "signature"
exclude_patterns = ['_build']
