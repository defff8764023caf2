import uvicorn
import os
from interpretlab.core.config import settings

if __name__ == "__main__":
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    print(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    print(f"API docs: http://localhost:8000/docs")
    uvicorn.run("interpretlab.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
