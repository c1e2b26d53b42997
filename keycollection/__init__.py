from .BaseCollection import BaseCollection, normalize_key
from .exceptions import CollectionError, CollectionDestroyedError, InvalidKeyTypeError
from .models import CollectionState, CollectionStats, CollectionOptions, Statistics
from .utils import setup_logging, perf_now, clock_source

__all__ = ['BaseCollection',
           'normalize_key',
           'CollectionError',
           'CollectionDestroyedError',
           'InvalidKeyTypeError',
           'CollectionState',
           'CollectionStats',
           'CollectionOptions',
           'Statistics',
           'setup_logging',
           'perf_now',
           'clock_source'
          ]
