"""State layer.

The event store and snapshot slot are the only mutable state in the
library. Both are owned by :class:`pyvehicleops.dashboard.Dashboard`.
"""
