import logging
import math
from functools import partial, wraps
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from keycollection.exceptions import CollectionDestroyedError, InvalidKeyTypeError
from keycollection.models.models import CollectionOptions, CollectionState, CollectionStats
from keycollection.utils.logging_config import setup_logging
from keycollection.utils.clock import perf_now

logger = setup_logging(log_level=logging.INFO, log_tag="collection")

Scalar = Union[str, int, float]
KeyArg = Union[Scalar, List[Scalar], Tuple[Scalar, ...]]

def _is_scalar(key) -> bool:
    # bool是int的子类，单独排除；NaN与自身不相等，无法作为key查回
    if isinstance(key, bool) or not isinstance(key, (str, int, float)):
        return False
    return not (isinstance(key, float) and math.isnan(key))

def normalize_key(key: KeyArg) -> Tuple[Scalar, ...]:
    """将单个key或key序列统一转换为key元组"""
    if _is_scalar(key):
        return (key,)
    if isinstance(key, (list, tuple)):
        for k in key:
            if not _is_scalar(k):
                logger.warning(f"非法的key类型: {k!r}")
                raise InvalidKeyTypeError(k)
        return tuple(key)
    logger.warning(f"非法的key类型: {key!r}")
    raise InvalidKeyTypeError(key)

def active_only(func):
    """销毁后调用立即失败"""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        if self._state is CollectionState.DESTROYED:
            logger.warning(f"{func.__name__} called after destroy")
            raise CollectionDestroyedError(func.__name__)
        return func(self, *args, **kwargs)
    return wrapper

class BaseCollection:
    """
    类似dict的键值容器，用于memoization和快速查找。
    与dict的区别在于key和value是多对一关系：多个key可以指向同一个value。

    >>> collection = BaseCollection()
    >>> collection.set(['a', 'b', 'c'], 'abc')
    >>> collection.get('b')
    'abc'

    非线程安全，多线程访问需要调用方自行加锁。
    """

    def __init__(self, default_value: Any = None, *, clock: Callable[[], float] = perf_now):
        """
        :param default_value: get()找不到有效值时返回的默认值
        :param clock: 无参时钟函数，返回毫秒时间戳，用于记录创建/清空时间
        """
        self._default_value = default_value
        self._clock = clock
        self._state = CollectionState.ACTIVE
        self._values: List[Any] = []
        self._keys: Dict[Scalar, int] = {}
        self._timestamp: float = clock()
        logger.debug(f"创建集合, 默认值: {default_value!r}")

    @classmethod
    def from_options(cls, options: CollectionOptions) -> "BaseCollection":
        """根据CollectionOptions创建集合，不修改模块日志配置"""
        return cls(options.default_value)

    @property
    def is_destroyed(self) -> bool:
        return self._state is CollectionState.DESTROYED

    @property
    @active_only
    def size(self) -> int:
        """槽位数量，不是key的数量"""
        return len(self._values)

    @property
    @active_only
    def length(self) -> int:
        """size的别名"""
        return len(self._values)

    @property
    @active_only
    def timestamp(self) -> float:
        """创建或最近一次clear()的时间戳"""
        return self._timestamp

    @active_only
    def clear(self) -> None:
        """清空所有槽位和key，重置时间戳，保留默认值"""
        self._values = []
        self._keys = {}
        self._timestamp = self._clock()
        logger.debug(f"集合已清空, timestamp: {self._timestamp}")

    @active_only
    def set(self, key: KeyArg, value: Any) -> None:
        """
        追加一个新槽位，并将key（或key序列中的每一个）指向该槽位。
        已存在的key会被重新指向新槽位，旧槽位保留。
        """
        keys = normalize_key(key)
        self._values.append(value)
        index = len(self._values) - 1
        for k in keys:
            self._keys[k] = index

    @active_only
    def get(self, key: KeyArg) -> Any:
        """
        返回key对应的值。传入key序列时从最后一个开始查找，
        返回第一个值为真的结果；都找不到时返回默认值。
        注意：值为0、''、None等假值时也视为未找到。
        """
        for k in reversed(normalize_key(key)):
            index = self._keys.get(k)
            if index is None:
                continue
            value = self._values[index]
            if value:
                return value
        return self._default_value

    @active_only
    def has(self, key: KeyArg) -> bool:
        """任意一个key存在即返回True，不关心值的真假"""
        for k in reversed(normalize_key(key)):
            if k in self._keys:
                return True
        return False

    @active_only
    def index_of(self, key: Scalar) -> Optional[int]:
        """返回key指向的槽位序号，不存在返回None"""
        if not _is_scalar(key):
            logger.warning(f"非法的key类型: {key!r}")
            raise InvalidKeyTypeError(key)
        return self._keys.get(key)

    @active_only
    def keys(self) -> List[Scalar]:
        """按首次插入顺序返回所有key"""
        return list(self._keys)

    @active_only
    def values(self) -> List[Any]:
        """按插入顺序返回所有值的浅拷贝"""
        return list(self._values)

    @active_only
    def items(self) -> List[Tuple[Tuple[Scalar, ...], Any]]:
        """每个槽位一项：(指向该槽位的key元组, 值)"""
        grouped: List[List[Scalar]] = [[] for _ in self._values]
        for k, index in self._keys.items():
            grouped[index].append(k)
        return [(tuple(keys), value) for keys, value in zip(grouped, self._values)]

    def _bind(self, callback: Callable, scope: Any) -> Callable:
        # scope作为第一个位置参数传入，相当于方法的self
        if scope is None:
            return callback
        return partial(callback, scope)

    @active_only
    def every(self, callback: Callable, scope: Any = None) -> bool:
        """
        按顺序对每个值调用callback(value, index, values)，
        遇到返回假值时立即停止并返回False，全部为真返回True。
        """
        func = self._bind(callback, scope)
        snapshot = tuple(self._values)
        for i, value in enumerate(snapshot):
            if not func(value, i, snapshot):
                return False
        return True

    @active_only
    def for_each(self, callback: Callable, scope: Any = None) -> None:
        """按顺序对每个值调用callback(value, index, values)"""
        func = self._bind(callback, scope)
        snapshot = tuple(self._values)
        for i, value in enumerate(snapshot):
            func(value, i, snapshot)

    forEach = for_each

    @active_only
    def map(self, callback: Callable, scope: Any = None) -> List[Any]:
        """按顺序对每个值调用callback(value, index, values)，返回结果列表"""
        func = self._bind(callback, scope)
        snapshot = tuple(self._values)
        return [func(value, i, snapshot) for i, value in enumerate(snapshot)]

    @active_only
    def clone(self) -> "BaseCollection":
        """创建副本，不共享任何可变结构，保留默认值"""
        collection = self.__class__(self._default_value, clock=self._clock)
        collection._values = list(self._values)
        collection._keys = dict(self._keys)
        logger.debug(f"克隆集合, size: {len(self._values)}, keys: {len(self._keys)}")
        return collection

    @active_only
    def copy(self, source: "BaseCollection") -> None:
        """清空当前集合，然后按槽位复制source的内容，保留所有别名key"""
        if not isinstance(source, BaseCollection):
            raise TypeError(f"copy() expects a BaseCollection, got {type(source).__name__}")
        if source is self:
            return
        items = source.items()
        self.clear()
        for keys, value in items:
            self.set(keys, value)
        logger.debug(f"复制集合完成, size: {len(self._values)}")

    @active_only
    def stats(self) -> CollectionStats:
        bound_slots = set(self._keys.values())
        return CollectionStats(
            size=len(self._values),
            key_count=len(self._keys),
            alias_count=len(self._keys) - len(bound_slots),
            orphan_count=len(self._values) - len(bound_slots),
            timestamp=self._timestamp,
            state=self._state,
        )

    def destroy(self) -> None:
        """释放内部结构，之后除destroy外的调用都会抛出CollectionDestroyedError"""
        if self._state is CollectionState.DESTROYED:
            return
        self._values = None
        self._keys = None
        self._state = CollectionState.DESTROYED
        logger.debug("集合已销毁")

    # 下标访问与dict保持一致
    def __setitem__(self, key: KeyArg, value: Any):
        self.set(key, value)

    def __getitem__(self, key: KeyArg) -> Any:
        return self.get(key)

    def __contains__(self, key: KeyArg) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return self.size

    def __bool__(self) -> bool:
        return self.size > 0

    def __iter__(self):
        return iter(self.keys())

    def __copy__(self) -> "BaseCollection":
        return self.clone()

    def __repr__(self) -> str:
        if self._state is CollectionState.DESTROYED:
            return f"{self.__class__.__name__}(destroyed)"
        return f"{self.__class__.__name__}(size={len(self._values)}, keys={len(self._keys)})"
