import uvicorn
from fundtheworld.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "fundtheworld.main:app",
        host="localhost",
        port=settings.port,
        reload=settings.debug
    )
