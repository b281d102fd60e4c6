import asyncio
import json
import os
from datetime import datetime

import pandas as pd
from tqdm import tqdm

from . import config
from .analyzer import BusinessAnalyzer
from .errors import AuthenticationError
from .logger import get_logger
from .providers import build_adapter, credential_for
from .scoring import DIMENSIONS

log = get_logger()


def _normalize_url(x: str) -> str:
    x = (x or "").strip()
    if not x or x.lower() in {"nan", "none", "null"}:
        return ""
    if x.startswith("http://") or x.startswith("https://"):
        return x
    if x.startswith("www.") or "." in x:
        return "https://" + x
    return x


def read_urls(path: str) -> list[str]:
    """Read URLs from a CSV: the ``url``/``website`` column, else the first column."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df = df.rename(columns={c: c.strip() for c in df.columns})

    column = None
    for col in df.columns:
        if col.lower() in {"url", "website"}:
            column = col
            break
    if column is None:
        if df.columns.empty:
            raise ValueError(f"No columns found in {path}")
        column = df.columns[0]

    urls = [_normalize_url(u) for u in df[column].astype(str)]
    return [u for u in urls if u]


def flatten(analysis: dict) -> dict:
    row = {
        "url": analysis.get("url"),
        "overall_score": analysis.get("overallScore"),
        "business_model": analysis.get("businessModel"),
        "revenue_stream": analysis.get("revenueStream"),
        "target_market": analysis.get("targetMarket"),
    }
    details = analysis.get("scoreDetails") or {}
    for name in DIMENSIONS:
        row[f"{name}_score"] = (details.get(name) or {}).get("score")
    insights = analysis.get("aiInsights") or {}
    row["key_insight"] = insights.get("keyInsight")
    row["risk_factor"] = insights.get("riskFactor")
    row["opportunity"] = insights.get("opportunity")
    return row


async def run(input_path: str = config.INPUT_PATH, provider: str = config.AI_PROVIDER) -> dict:
    urls = read_urls(input_path)
    credential = credential_for(provider)
    if not credential.api_key:
        raise AuthenticationError("No active AI provider configured")
    adapter = build_adapter(credential)
    analyzer = BusinessAnalyzer(adapter)

    config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    in_stem = os.path.splitext(os.path.basename(input_path))[0]
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    out_ndjson_path = config.OUTPUT_DIR / f"{in_stem}__{ts}.ndjson"
    out_csv_path = config.OUTPUT_DIR / f"{in_stem}__{ts}.csv"

    with tqdm(total=len(urls), desc="Analyzing") as progress:
        batch = await analyzer.analyze_batch(urls, progress=progress)

    result = batch.to_dict()
    with open(out_ndjson_path, "w", encoding="utf-8") as f:
        for r in result["analyses"]:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")

    rows = [flatten(r) for r in result["analyses"]]
    rows += [{"url": f["url"], "error": f["message"]} for f in result["failures"]]
    pd.DataFrame(rows).to_csv(out_csv_path, index=False)

    log.info(f"Analyzed {len(urls)} URL(s): {batch.successful} successful, {batch.failed} failed")
    print(f"Wrote {out_ndjson_path} and {out_csv_path}")
    return result


if __name__ == "__main__":
    asyncio.run(run())
