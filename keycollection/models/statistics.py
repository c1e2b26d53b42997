import logging
from keycollection.utils import logging_config

logger = logging_config.setup_logging(logging.INFO, "statistics")

class Statistics:
    """集合的文本描述，便于调试输出"""

    @classmethod
    def get_slot(cls, collection, index: int) -> str:
        items = collection.items()
        if index < 0 or index >= len(items):
            logger.debug(f"get_slot: 槽位{index}不存在")
            return f"槽位：{index}\n\n不存在\n"
        keys, value = items[index]
        content = f"槽位：{index}\n"
        content += f"值：{value!r}\n"
        if not keys:
            content += "相关key：无\n"
            return content
        content += "相关key：\n"
        for key in keys:
            content += f"    {key!r}\n"
        return content

    @classmethod
    def summary(cls, collection) -> str:
        if collection.is_destroyed:
            return "状态：已销毁\n"
        stats = collection.stats()
        content = f"状态：{stats.state.name}\n"
        content += f"槽位数：{stats.size}\n"
        content += f"key数：{stats.key_count}\n"
        content += f"别名数：{stats.alias_count}\n"
        content += f"无key槽位：{stats.orphan_count}\n"
        content += f"时间戳：{stats.timestamp:.3f}\n"
        return content
