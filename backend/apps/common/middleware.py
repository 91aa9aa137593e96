from __future__ import annotations

from apps.common.utils.request_context import bind_request, clear_request_context, generate_request_id

REQUEST_ID_HEADER = "X-Request-ID"


def client_ip(request) -> str:
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "")


class RequestContextMiddleware:
    """
    为每个请求绑定日志上下文，并在响应头回写 X-Request-ID

    调用方传入的 X-Request-ID 原样沿用，便于跨服务排查
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        request.request_id = request_id
        bind_request(request_id=request_id, path=request.path, method=request.method, ip=client_ip(request))
        try:
            response = self.get_response(request)
        finally:
            clear_request_context()
        response[REQUEST_ID_HEADER] = request_id
        return response
