"""
Utilities for forests of plain mappings: node lookup, selection
compression/expansion and forest <-> list conversion.

Release logic:
 1. Remove ".devX" from __version__ (below)
 2. git add treeutil/__init__.py
 3. git commit -m 'Bump to <version>'
 4. git tag <version>
 5. git push --tags
 6. pip install --upgrade pip wheel twine
 7. python setup.py sdist bdist_wheel
 8. twine upload dist/*
 9. bump the version, append ".dev0" to __version__
"""
__version__ = '1.0.0'
