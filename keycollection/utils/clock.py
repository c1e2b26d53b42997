import time
from typing import Callable, Tuple

def _select_clock() -> Tuple[str, Callable[[], float]]:
    """选择时钟源：优先使用单调的高精度计数器，否则退回到系统时间"""
    try:
        info = time.get_clock_info("perf_counter")
    except ValueError:
        return "time", time.time
    if info.monotonic:
        return "perf_counter", time.perf_counter
    return "time", time.time

# 导入时确定，运行期间不再切换
_clock_source, _clock = _select_clock()

def perf_now() -> float:
    """返回当前时间戳（毫秒，允许小数）"""
    return _clock() * 1000.0

def clock_source() -> str:
    """返回当前使用的时钟源名称"""
    return _clock_source
