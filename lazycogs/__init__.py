"""
lazycogs

lazycogs is a python package of lazily cloned (clone-on-write) data
structures. Cloning such a structure is O(1): the clone only takes
another reference to the storage. The storage is copied first when one
of the clones is about to modify it, and only the part that is shared
and that would be modified gets copied.

The package provides the LazyClone interface (lazycogs.core.lazy),
a wrapper for plain data (lazycogs.lc) and two collections,
a vector (lazycogs.collections.vector) and a singly-linked list
(lazycogs.collections.lazylist), both in a single-threaded and
a thread-safe variant.
"""
