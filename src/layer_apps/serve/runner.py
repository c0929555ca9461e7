"""Launch one of the demo apps under uvicorn."""
from __future__ import annotations
import argparse
import os

import uvicorn

APPS = {
    "chatbot": "layer_apps.serve.chatbot_app:app",
    "content": "layer_apps.serve.content_app:app",
    "image": "layer_apps.serve.image_app:app",
    "recipe": "layer_apps.serve.recipe_app:app",
}

def main() -> None:
    ap = argparse.ArgumentParser(description="Serve a Layer demo app")
    ap.add_argument("--app", required=True, choices=sorted(APPS))
    ap.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    ap.add_argument("--port", type=int, default=int(os.getenv("PORT", "3000")))
    ap.add_argument("--reload", action="store_true")
    args = ap.parse_args()

    uvicorn.run(APPS[args.app], host=args.host, port=args.port, reload=args.reload)

if __name__ == "__main__":
    main()
