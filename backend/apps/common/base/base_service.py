from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from django.db import transaction

from apps.common.exceptions import BizError
from apps.common.infra.logger import get_logger, logger_extra

logger = get_logger(__name__)

R = TypeVar("R")


class BaseService(ABC, Generic[R]):
    """
    业务服务基类

    - 入参是 Actor / Schema / id 等普通对象，不接触 request
    - 仓储与协作服务通过构造函数注入，测试时可以替换
    - execute() = validate() + perform()，默认包在一个事务里：
      任何一步抛错，本次调用的所有写入一起回滚
    - 只读服务把 atomic_enabled 设为 False
    """

    atomic_enabled: bool = True

    def validate(self, *args, **kwargs) -> None:
        """前置检查钩子，默认不做任何事"""

    @abstractmethod
    def perform(self, *args, **kwargs) -> R:
        ...

    def execute(self, *args, **kwargs) -> R:
        try:
            if not self.atomic_enabled:
                self.validate(*args, **kwargs)
                return self.perform(*args, **kwargs)
            with transaction.atomic():
                self.validate(*args, **kwargs)
                return self.perform(*args, **kwargs)
        except BizError:
            raise
        except Exception:
            logger.exception("服务执行失败", extra=logger_extra({"service": type(self).__name__}))
            raise

    __call__ = execute
