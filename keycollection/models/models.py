from typing import Any
from enum import Enum
from pydantic import BaseModel, Field

class CollectionState(Enum):
    ACTIVE = 1
    DESTROYED = 2

class CollectionStats(BaseModel):
    size: int = Field(ge=0)
    key_count: int = Field(ge=0)
    alias_count: int = Field(ge=0)  # 超出每个槽位一个key的部分
    orphan_count: int = Field(ge=0)  # 没有任何key指向的槽位
    timestamp: float
    state: CollectionState = CollectionState.ACTIVE

class CollectionOptions(BaseModel):
    default_value: Any = None
