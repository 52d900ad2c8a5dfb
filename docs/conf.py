import sys
import os

# to allow autodoc to discover the documented modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

project = 'Votesim'
copyright = '2026, Votesim contributors'
author = 'Votesim contributors'

extensions = [
    'sphinx.ext.autodoc',
    'recommonmark',
]

source_suffix = {
    '.rst': 'restructuredtext',
    '.md': 'markdown',
}

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

autodoc_member_order = 'bysource'

html_theme = 'sphinxdoc'
