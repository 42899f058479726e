#!/usr/bin/env python3
"""
Export the Mindmate LangGraph agent as Mermaid source.
Usage (from repo root):
  python scripts/export_agent_graph.py [--output-dir DIR]
Output: agent_graph.mmd (paste into https://mermaid.live to render).
"""
import argparse
import sys
from pathlib import Path

# Repo root and load .env before any app/tools imports
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))
_env = ROOT / ".env"
if _env.exists():
    from dotenv import load_dotenv
    load_dotenv(_env, override=True)

from app.core.agent import get_agent


def main() -> None:
    ap = argparse.ArgumentParser(description="Export agent graph to Mermaid")
    ap.add_argument("--output-dir", "-o", type=Path, default=Path.cwd(), help="Directory for output files")
    args = ap.parse_args()
    out_dir = args.output_dir
    out_dir.mkdir(parents=True, exist_ok=True)
    mmd_path = out_dir / "agent_graph.mmd"

    # Building the graph does not call the model
    g = get_agent().get_graph()
    mmd_path.write_text(g.draw_mermaid(), encoding="utf-8")
    print(f"Wrote {mmd_path}")


if __name__ == "__main__":
    main()
