"""
PinMatch FastAPI 服务

提供匹配、排序与设置接口
"""

import os
import time
import uuid
from typing import List, Optional, Union
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from pinmatch.engine import (
    MatchOption,
    MatcherConfig,
    StringMatcher,
    create_matcher,
    get_api_logger,
    parse_precision,
)

# 初始化日志
logger = get_api_logger()


# ===== 请求/响应模型 =====

class MatchRequest(BaseModel):
    """单条匹配请求"""
    query: str = Field(..., description="用户输入")
    candidate: str = Field(..., description="候选文本")
    ignore_case: bool = Field(True, description="忽略大小写")


class MatchResponse(BaseModel):
    """匹配结果"""
    success: bool
    raw_score: int
    score: int
    matched_indices: List[int]
    precision_met: bool


class RankRequest(BaseModel):
    """批量排序请求"""
    query: str = Field(..., description="用户输入")
    candidates: List[str] = Field(..., description="候选列表")
    ignore_case: bool = Field(True, description="忽略大小写")
    top_k: int = Field(20, description="返回数量", ge=1, le=500)


class RankedItem(BaseModel):
    """排序项"""
    candidate: str
    score: int
    matched_indices: List[int]


class RankResponse(BaseModel):
    """排序结果"""
    query: str
    results: List[RankedItem]


class SettingsModel(BaseModel):
    """匹配器设置"""
    search_precision: int
    should_use_pinyin: bool


class SettingsUpdate(BaseModel):
    """设置变更（未给出的字段保持不变）"""
    search_precision: Optional[Union[int, str]] = Field(None, description="整数或 regular / low / none")
    should_use_pinyin: Optional[bool] = None


class HealthResponse(BaseModel):
    """健康检查响应"""
    status: str
    version: str


# ===== 全局匹配器实例 =====
matcher: Optional[StringMatcher] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    global matcher

    logger.info("=" * 50)
    logger.info("PinMatch API 服务启动")

    if matcher is None:
        matcher = create_matcher(MatcherConfig.from_env())

    logger.info(f"  搜索精度: {matcher.config.search_precision}")
    logger.info(f"  拼音匹配: {'✓' if matcher.config.should_use_pinyin else '✗'}")
    logger.info("=" * 50)

    yield

    matcher = None
    logger.info("PinMatch API 服务已停止")


# ===== FastAPI 应用 =====
app = FastAPI(
    title="PinMatch API",
    description="启动器模糊匹配引擎 API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===== 请求日志中间件 =====

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """记录所有请求的详细日志"""
    request_id = str(uuid.uuid4())[:8]
    start_time = time.perf_counter()

    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"[{request_id}] --> {request.method} {request.url.path} | IP: {client_ip}")

    try:
        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code
        log_level = "info" if status_code < 400 else "warning" if status_code < 500 else "error"
        getattr(logger, log_level)(
            f"[{request_id}] <-- {status_code} | {elapsed_ms:.2f}ms"
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"

        return response

    except Exception as e:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"[{request_id}] <-- ERROR | {elapsed_ms:.2f}ms | {type(e).__name__}: {e}")
        raise


def _require_matcher() -> StringMatcher:
    if matcher is None:
        logger.error("匹配器未就绪，拒绝请求")
        raise HTTPException(status_code=503, detail="匹配器未就绪")
    return matcher


# ===== API 路由 =====

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """健康检查"""
    from pinmatch import __version__
    return HealthResponse(
        status="healthy" if matcher else "not_ready",
        version=__version__,
    )


@app.post("/match", response_model=MatchResponse)
async def match(request: MatchRequest):
    """单条匹配"""
    current = _require_matcher()
    result = current.fuzzy_search(
        request.query,
        request.candidate,
        MatchOption(ignore_case=request.ignore_case),
    )
    return MatchResponse(
        success=result.success,
        raw_score=result.raw_score,
        score=result.score,
        matched_indices=result.matched_indices,
        precision_met=result.is_search_precision_score_met(),
    )


@app.post("/rank", response_model=RankResponse)
async def rank(request: RankRequest):
    """对候选列表打分排序，丢弃 score 为 0 的结果"""
    current = _require_matcher()

    if not request.query.strip():
        logger.warning("无效请求: 空查询")
        raise HTTPException(status_code=400, detail="查询不能为空")

    # 整批使用同一份配置快照
    config = current.config
    option = MatchOption(ignore_case=request.ignore_case)

    start = time.perf_counter()
    items = []
    for candidate in request.candidates:
        result = current.fuzzy_search(request.query, candidate, option, config=config)
        if result.success and result.score > 0:
            items.append(RankedItem(
                candidate=candidate,
                score=result.score,
                matched_indices=result.matched_indices,
            ))
    items.sort(key=lambda item: item.score, reverse=True)
    elapsed = (time.perf_counter() - start) * 1000

    logger.debug(
        f"排序: '{request.query}' | {len(request.candidates)} 个候选 "
        f"| 命中 {len(items)} | {elapsed:.2f}ms"
    )

    return RankResponse(query=request.query, results=items[:request.top_k])


@app.get("/settings", response_model=SettingsModel)
async def get_settings():
    """当前设置"""
    config = _require_matcher().config
    return SettingsModel(
        search_precision=config.search_precision,
        should_use_pinyin=config.should_use_pinyin,
    )


@app.put("/settings", response_model=SettingsModel)
async def update_settings(update: SettingsUpdate):
    """更新设置，只影响之后的请求"""
    current = _require_matcher()

    changes = {}
    if update.search_precision is not None:
        try:
            changes['search_precision'] = parse_precision(update.search_precision)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    if update.should_use_pinyin is not None:
        changes['should_use_pinyin'] = update.should_use_pinyin

    config = current.update_config(**changes)
    return SettingsModel(
        search_precision=config.search_precision,
        should_use_pinyin=config.should_use_pinyin,
    )


# ===== 启动入口 =====

def main():
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    log_level = os.getenv("LOG_LEVEL", "info").lower()

    logger.info(f"启动 PinMatch API 服务: http://{host}:{port}")
    logger.info(f"API 文档: http://{host}:{port}/docs")

    uvicorn.run(
        "pinmatch.api.server:app",
        host=host,
        port=port,
        reload=False,
        workers=1,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
