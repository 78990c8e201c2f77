# Ensure registration happens by importing modules
from .base import LaborProvider, provider_registry  # noqa
from . import heuristic, remote  # noqa
from .resolver import build_providers, resolve, resolve_with_deadline  # noqa
