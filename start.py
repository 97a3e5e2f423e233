#!/usr/bin/env python3
import sys

import uvicorn

from print_queue.core.config import settings

if __name__ == "__main__":
    reload = "--reload" in sys.argv[1:]
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=reload,
        log_config=None,
    )
