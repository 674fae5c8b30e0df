from .registry import (
    WireType,
    SignalRegistry,
    SignalRegistryEntry,
    build_registry,
    unique_id_generator,
)
from .vcdencoder import VCDEncoder, write_vcd, encode_vcd
