from .logging_config import setup_logging
from .clock import perf_now, clock_source

__all__ = ['setup_logging',
           'perf_now',
           'clock_source'
          ]
