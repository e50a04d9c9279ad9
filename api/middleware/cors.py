"""
CORS 中间件

浏览器上传流程直接调用本服务：所有响应都带
Access-Control-Allow-Origin，OPTIONS 预检直接返回空体 200，
不要求 Origin / Access-Control-Request-Method 请求头。
"""
from typing import Iterable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from core.response import cors_headers


class PermissiveCORSMiddleware(BaseHTTPMiddleware):

    def __init__(
        self,
        app: ASGIApp,
        allow_origin: str = "*",
        allow_headers: Iterable[str] = ("authorization", "x-client-info", "apikey", "content-type"),
    ):
        super().__init__(app)
        self.headers = cors_headers(allow_origin, allow_headers)

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self.headers)

        response = await call_next(request)
        response.headers.update(self.headers)
        return response
