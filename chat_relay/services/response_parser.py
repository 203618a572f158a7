#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
响应解析器模块 - 从各家上游的 JSON 响应中提取回复文本

按固定优先级依次尝试多种响应结构，首个非空结果胜出；
全部未命中时回退为整个响应的 JSON 文本（截断到 2000 字符）。
"""

import json
from typing import Any, Optional, Tuple, Union

import orjson

from ..helpers import debug_log

FALLBACK_MAX_CHARS = 2000

PathStep = Union[str, int]

# 顺序即优先级：OpenAI 标准结构 > 流式 delta > 其他厂商结构
EXTRACTION_RULES: Tuple[Tuple[str, Tuple[PathStep, ...]], ...] = (
    ("choices.message", ("choices", 0, "message", "content")),
    ("choices.delta", ("choices", 0, "delta", "content")),
    ("data", ("data", 0, "content")),
    ("result.choices.message", ("result", "choices", 0, "message", "content")),
)


def resolve_path(data: Any, path: Tuple[PathStep, ...]) -> Optional[Any]:
    """沿路径取值，任一步类型不符或缺失时返回 None"""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                return None
        elif not isinstance(current, dict) or step not in current:
            return None
        current = current[step]
    return current


def dumps_compact(data: Any) -> str:
    """紧凑 JSON 序列化；orjson 无法处理时（如超过 64 位的整数）回退到标准 json"""
    try:
        return orjson.dumps(data, option=orjson.OPT_NON_STR_KEYS).decode("utf-8")
    except orjson.JSONEncodeError:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


class ResponseParser:
    """响应解析器类"""

    def __init__(self, rules=EXTRACTION_RULES, max_chars: int = FALLBACK_MAX_CHARS):
        self.rules = rules
        self.max_chars = max_chars

    def extract_text(self, data: Any) -> str:
        for name, path in self.rules:
            value = resolve_path(data, path)
            if value:
                debug_log("[PARSER] 命中响应结构", rule=name)
                return value if isinstance(value, str) else dumps_compact(value)

        debug_log("[PARSER] 未识别的响应结构，回退为原始 JSON")
        return self.fallback_text(data)

    def fallback_text(self, data: Any) -> str:
        return dumps_compact(data)[: self.max_chars]


# 全局单例实例
response_parser = ResponseParser()


def extract_reply_text(data: Any) -> str:
    return response_parser.extract_text(data)
