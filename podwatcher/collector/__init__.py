"""Collector package for podwatcher.

Submodules
----------
snapshot -- SnapshotProvider: cluster-wide pod listing, yields the resourceVersion
            that anchors the next watch.
stream   -- ChangeStreamSource / ChangeStream: pod watch subscription decoded into
            tagged change notifications.
"""

from podwatcher.collector.snapshot import SnapshotProvider
from podwatcher.collector.stream import ChangeStream, ChangeStreamSource, decode_event

__all__ = ["ChangeStream", "ChangeStreamSource", "SnapshotProvider", "decode_event"]
