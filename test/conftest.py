import os

# numba reads the pool size when it is imported, at least two threads are
# needed to compare partitions of the rows.
os.environ.setdefault("NUMBA_NUM_THREADS",
                      str(max(2, os.cpu_count() or 1)))
