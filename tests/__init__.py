"""
This __init__.py file is kept in the root tests directory while the other directories of the
test tree have no __init__.py files.

Keeping it makes pytest treat tests/ as a package, so helpers import consistently as
`tests.helpers...` in every environment. Test module basenames must therefore stay unique
across the whole tree.
"""
