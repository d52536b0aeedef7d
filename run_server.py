import os
import uvicorn

if __name__ == "__main__":
    port = int(os.environ.get("PORT", "3001"))
    print(f"Starting AI Voice Studio API on port {port}")
    # Single process: the job store lives in this process's memory
    uvicorn.run("app.main:app", host="0.0.0.0", port=port, reload=False, workers=1)
