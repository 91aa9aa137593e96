"""
业务异常体系（BizError）

约定与作用：
- 所有“预期内的业务错误”都继承 BizError，避免直接抛框架异常
- 统一错误码/HTTP 状态/提示语，便于前后端对齐
- 系统级错误（代码 bug、数据库故障等）由全局异常处理器按 5001/5002 处理

错误码规范（与前端既有约定保持一致）：
- 0                : 成功（只出现在正常响应里）
- 1                : 通用业务错误
- 1001~1099        : 用户 / 认证 / 权限相关
- 2001~2099        : 资源不存在（方向、题目、提交、提交点、评分）
- 3001~3099        : 参数错误、请求体解析失败、资源冲突、引用错误
- 5001~5099        : 系统错误（数据库、未分类异常）

HTTP 状态约定：
- 除未登录/令牌失效（401）与权限不足（403）外，业务错误统一返回 HTTP 200，
  由 body.code 区分具体错误

使用方式：
- 业务层抛 BizError 或子类；全局异常处理器读取 exc.code/message/http_status/extra 构造统一响应
"""


class BizError(Exception):
    """
    所有业务异常的基类

    设计要点：
    - 不耦合 DRF / Response，只是纯数据和语义；
    - 子类只需覆盖 default_code / default_message / http_status；
    - 也可以在 __init__ 时传入自定义 message / code / extra 做覆盖
    """

    #: 子类可覆盖的默认错误码
    default_code: int = 1

    #: 子类可覆盖的默认提示信息
    default_message: str = "error"

    #: 子类可覆盖的建议 HTTP 状态码（交给异常处理器用）
    http_status: int = 200

    def __init__(self, message: str | None = None, code: int | None = None, *, extra: dict | None = None):
        self.code = code if code is not None else self.default_code
        self.message = message if message is not None else self.default_message
        self.extra = extra or {}
        super().__init__(self.message)

    def __str__(self) -> str:  # 方便日志输出
        return f"[{self.code}] {self.message}"


# ======================
# 用户 / 认证 / 授权相关
# ======================

class UserNotFoundError(BizError):
    """用户不存在或已被删除"""
    default_code = 1001
    default_message = "用户不存在"


class ConflictError(BizError):
    """
    资源冲突：
    - 删除时仍存在依赖数据（方向下有题目、题目下有提交等）
    - 已存在同名对象
    """
    default_code = 3003
    default_message = "资源冲突"


class UserExistsError(ConflictError):
    """注册时用户名已被占用"""
    default_code = 1002
    default_message = "用户已存在"


class InvalidCredentialsError(BizError):
    """登录时密码校验失败"""
    default_code = 1003
    default_message = "密码错误"


class AuthError(BizError):
    """
    未认证：
    - 未携带令牌访问需要登录的接口
    - 令牌对应的账户已不可用
    """
    default_code = 1004
    default_message = "未授权"
    http_status = 401


class TokenError(AuthError):
    """
    Token 无效 / 过期 / 签名错误
    """
    default_code = 1006
    default_message = "无效的token"


class PermissionDeniedError(BizError):
    """
    权限不足：
    - 普通用户访问管理员接口
    - 非方向负责人管理题目或评分
    - 查看他人的提交
    """
    default_code = 1005
    default_message = "权限不足"
    http_status = 403


# ======================
# 资源不存在
# ======================

class NotFoundError(BizError):
    """
    通用资源不存在，具体资源使用下方子类区分错误码
    """
    default_code = 2000
    default_message = "资源不存在"


class DirectionNotFoundError(NotFoundError):
    default_code = 2001
    default_message = "方向不存在"


class ProblemNotFoundError(NotFoundError):
    default_code = 2002
    default_message = "题目不存在"


class SubmissionNotFoundError(NotFoundError):
    default_code = 2003
    default_message = "提交不存在"


class SubmissionPointNotFoundError(NotFoundError):
    default_code = 2004
    default_message = "提交点不存在"


class ScoreNotFoundError(NotFoundError):
    default_code = 2005
    default_message = "评分不存在"


# ======================
# 参数类错误
# ======================

class ValidationError(BizError):
    """
    参数校验 / 请求数据不合法：
    - 缺少必要字段
    - 字段格式错误
    - 评分超过提交点最大分值
    """
    default_code = 3001
    default_message = "参数错误"


class BindError(BizError):
    """
    请求体无法解析（非法 JSON、字段类型无法绑定等）
    """
    default_code = 3002
    default_message = "参数绑定失败"


class InvalidReferenceError(ValidationError):
    """
    引用关系不成立：
    - 提交点不属于所提交的题目
    """
    default_code = 3004
    default_message = "提交点不存在或不属于该题目"


# ======================
# 系统错误
# ======================

class DatabaseError(BizError):
    """数据库读写失败"""
    default_code = 5001
    default_message = "数据库错误"


class InternalError(BizError):
    """未分类的系统错误"""
    default_code = 5002
    default_message = "内部错误"
