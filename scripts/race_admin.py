from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict, replace
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from lapview.api import RaceApiClient, encode_upload
from lapview.config import get_settings
from lapview.errors import DashboardError
from lapview.utils import raw_download_filename


async def _run(args: argparse.Namespace, client: RaceApiClient) -> object:
    if args.mode == "list":
        return [asdict(session) for session in await client.list_sessions()]
    if args.mode == "upload":
        if args.file is None:
            raise ValueError("upload mode requires --file")
        return await client.upload_race(encode_upload(args.file))

    if args.race_id is None:
        raise ValueError(f"{args.mode} mode requires --race-id")
    if args.mode == "status":
        return asdict(await client.get_session_status(args.race_id))
    if args.mode == "delete":
        await client.delete_race(args.race_id)
        return {"race_id": args.race_id, "deleted": True}

    if args.raw:
        out = Path(args.out or raw_download_filename(args.race_id))
        out.write_bytes(await client.download_race_raw(args.race_id))
        return {"race_id": args.race_id, "path": str(out)}
    download = await client.download_race(args.race_id)
    if args.out:
        Path(args.out).write_text(json.dumps(asdict(download)))
        return {"race_id": args.race_id, "path": args.out, "size_bytes": download.size_bytes}
    return asdict(download)


def main() -> None:
    parser = argparse.ArgumentParser(description="Manage race sessions on the telemetry backend.")
    parser.add_argument("mode", choices=["list", "status", "upload", "download", "delete"])
    parser.add_argument("--race-id")
    parser.add_argument("--file", type=Path)
    parser.add_argument("--raw", action="store_true", help="download the raw compressed package")
    parser.add_argument("--out")
    parser.add_argument("--base-url")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if args.base_url:
        settings = replace(settings, api_base_url=args.base_url)

    try:
        result = asyncio.run(_run(args, RaceApiClient(settings)))
    except DashboardError as exc:
        logging.getLogger("race_admin").error("%s failed: %s", args.mode, exc)
        raise SystemExit(1) from exc

    print(json.dumps(result, default=str, indent=2))


if __name__ == "__main__":
    main()
