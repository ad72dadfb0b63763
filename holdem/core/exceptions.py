"""
一手牌业务异常定义
区分可恢复的行动错误和不可恢复的配置/牌堆错误
"""


class PokerGameError(Exception):
    """德州扑克游戏基础异常类"""
    pass


class InvalidActionError(PokerGameError):
    """无效玩家行动异常：座位不在行动位、已弃牌/全押或手牌已结束，拒绝时不修改状态"""
    pass


class DeckExhaustedError(PokerGameError):
    """牌堆耗尽异常：属于配置错误，直接向上抛出，不重试"""
    pass


class ConfigurationError(PokerGameError):
    """配置错误异常：在手牌开始前拒绝无效的座位或筹码设置"""
    pass
