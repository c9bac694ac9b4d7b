"""异常定义

链式振子模拟只有一种前置条件错误：配置非法。所有校验均在时间推进
开始之前同步完成，不会产生部分结果。
"""

from __future__ import annotations


class InvalidConfigurationError(ValueError):
    """介质、时间网格或驱动参数非法。

    继承自 :class:`ValueError`，调用方可以按普通参数错误统一捕获。

    Notes
    -----
    数值发散（步长过大）不属于本异常的范畴，内核不做检测，发散仅以
    极大值、``inf`` 或 ``nan`` 的形式出现在返回数组中。
    """
