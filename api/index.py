"""
Vercel serverless entry point

Vercel picks up the ASGI ``app`` object exported here and serves it for
every route under /api, so POST /api/chat reaches the relay router.
"""

import os
import sys

# 添加父目录到Python路径，以便导入 main 与 chat_relay
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import app  # noqa: E402

__all__ = ["app"]
