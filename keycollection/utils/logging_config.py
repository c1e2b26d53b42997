# version 2.0

import logging
import inspect
import sys
import os
from typing import Dict
from threading import Lock
import atexit
from logging.handlers import RotatingFileHandler

_app_name = "keycollection"
_log_dir = "logs"
_release = False
# release版本使用统一的log等级
# 非release版本，使用各自模块的log等级
_release_log_level = logging.INFO

_formatter = logging.Formatter(
    '%(asctime)s-%(funcName)s:%(lineno)d-%(levelname)s-[%(name)s]%(message)s'
)

class FileManager:
    """全局日志文件管理器（单例模式）"""
    _instance = None
    _lock = Lock()
    _open_rotating_handlers: Dict[str, RotatingFileHandler] = {}

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def get_rotating_handler(
        self,
        path: str,
        max_bytes: int = 10*1024*1024,
        backup_count: int = 5,
        mode: str = "a"
    ) -> RotatingFileHandler:
        """获取RotatingFileHandler，同一路径只打开一次"""
        with self._lock:
            if path not in self._open_rotating_handlers:
                self._prepare_directory(path)
                handler = RotatingFileHandler(
                    filename=path,
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                    encoding="utf-8",
                    mode=mode
                )
                self._open_rotating_handlers[path] = handler
            return self._open_rotating_handlers[path]

    def _prepare_directory(self, path: str):
        """确保目录存在"""
        dirname = os.path.dirname(path)
        if dirname and not os.path.exists(dirname):
            os.makedirs(dirname, exist_ok=True)

    def close_all(self):
        with self._lock:
            for path, handler in self._open_rotating_handlers.items():
                try:
                    handler.close()
                except (IOError, OSError) as e:
                    sys.stderr.write(f"Failed to close log file {path}: {str(e)}\n")
            self._open_rotating_handlers.clear()

_file_manager = FileManager()
atexit.register(_file_manager.close_all)

class ModuleFilter(logging.Filter):
    def __init__(self, logger_name):
        super().__init__()
        self.logger_name = logger_name

    def filter(self, record):
        return record.name == self.logger_name or record.exc_info is not None

def _get_caller_module() -> str:
    """获取调用者模块名"""
    frame = inspect.currentframe()
    try:
        # 回溯两层：当前函数 -> setup_logging -> 调用者
        if frame is not None and frame.f_back is not None:
            caller_frame = frame.f_back.f_back
            if caller_frame is not None:
                module_path = caller_frame.f_globals.get("__file__", "unknown")
                return os.path.splitext(os.path.basename(module_path))[0]
    finally:
        del frame  # 避免循环引用
    return "unknown"

def module_log_path(module_name: str) -> str:
    """模块专有日志文件路径"""
    return os.path.join(_log_dir, f"{_app_name}_{module_name}.log")

def setup_logging(log_level=logging.INFO, log_tag=None, b_log_file: bool=False, max_bytes=10485760, backup_count=0):
    """
    配置日志系统
    :param log_level: 日志级别 (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    :param log_tag: 日志客制化标记，None表示使用调用模块名称
    :param b_log_file: 是否输出到专有的日志文件，True表示同时输出到日志文件，False表示只输出到控制台
    :param max_bytes: 单个日志文件最大字节数
    :param backup_count: 保留的备份日志文件数量
    :return: 模块级logger
    """
    effective_log_level = _release_log_level if _release else log_level
    global_log_level = _release_log_level if _release else logging.DEBUG

    module_name = log_tag
    if not log_tag:
        module_name = _get_caller_module()

    # 创建模块级logger，不向root logger传递，避免重复输出
    logger = logging.getLogger(module_name)
    logger.setLevel(global_log_level)  # 过滤日志的第一个步骤，设置全局日志级别
    logger.propagate = False

    # 清除现有handler，重复调用时不会叠加输出
    # 文件handler由FileManager统一关闭
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, RotatingFileHandler):
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(_formatter)
    console_handler.setLevel(effective_log_level)   # 处理器的日志级别
    logger.addHandler(console_handler)

    if b_log_file:
        module_handler = _file_manager.get_rotating_handler(
            module_log_path(module_name),
            max_bytes=max_bytes,
            backup_count=backup_count,
            mode="a"
        )
        module_handler.setLevel(effective_log_level)
        for log_filter in module_handler.filters[:]:
            module_handler.removeFilter(log_filter)
        module_handler.addFilter(ModuleFilter(module_name))
        module_handler.setFormatter(_formatter)
        logger.addHandler(module_handler)

    return logger
