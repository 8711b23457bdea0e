import os

import uvicorn

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    # Single worker: each worker process loads its own dataset snapshot
    # and holds its own form session.
    workers = int(os.environ.get("WEB_CONCURRENCY", 1))
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        workers=workers,
    )
