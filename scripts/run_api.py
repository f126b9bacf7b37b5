import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import uvicorn

from innovatehub.config import load_config


def main() -> None:
    cfg = load_config()
    print(f"[api] InnovateHub server is running on port {cfg.PORT}")
    uvicorn.run("innovatehub.api.server:app", host=cfg.API_HOST, port=cfg.PORT, reload=False)


if __name__ == "__main__":
    main()
