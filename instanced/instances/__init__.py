"""Instance layout, sampling and storage."""

from instanced.instances.layout import InstanceLayout
from instanced.instances.sampling import make_rng, rand
from instanced.instances.store import Instance, InstanceStore

__all__ = ["Instance", "InstanceLayout", "InstanceStore", "make_rng", "rand"]
