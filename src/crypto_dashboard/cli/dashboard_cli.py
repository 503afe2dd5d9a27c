"""CLI to exercise the crypto_dashboard API routes.

Usage:
  poetry run dashboard-cli health
  poetry run dashboard-cli assets search "BTC, eth"
  poetry run dashboard-cli assets table --category Meme --movement gainers --head 10
  poetry run dashboard-cli watchlists import watchlist-1 "SOL PEPE"
  poetry run dashboard-cli settings toggle price
"""
import argparse
import json
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_assets_list(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/assets")
    r.raise_for_status()
    data = r.json()
    print(f"Found {len(data)} assets")
    print_json(data[: args.head] if args.head else data)
    return 0


def cmd_assets_search(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/assets/search", params={"q": args.query})
    r.raise_for_status()
    data = r.json()
    if not data:
        print("No coins found for those names/tickers.", file=sys.stderr)
        return 1
    print_json(data)
    return 0


def cmd_assets_table(client: httpx.Client, args: argparse.Namespace) -> int:
    params = {
        "search": args.search,
        "sort_key": args.sort_key,
        "sort_direction": args.direction,
        "movement": args.movement,
    }
    if args.category:
        params["category"] = args.category
    if args.watchlist:
        params["watchlist_id"] = args.watchlist
    r = client.get("/assets/table", params=params)
    r.raise_for_status()
    data = r.json()
    print(f"Table: {len(data)} rows")
    print_json(data[: args.head] if args.head else data)
    return 0


def cmd_assets_trends(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/assets/trends")
    r.raise_for_status()
    for trend in r.json():
        label = (
            f"{trend['coin_count']} assets"
            if args.count
            else f"+{trend['trend_score']:.1f}%"
        )
        top = ", ".join(c["symbol"] for c in trend["top_coins"])
        print(f"{trend['category']:<10} {label:>12}  {trend['heat_level']:<8} {top}")
    return 0


def cmd_assets_refresh(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.post("/assets/refresh")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_watchlists_list(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/watchlists")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_watchlists_create(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.post("/watchlists", json={"name": args.name})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_watchlists_rename(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.patch(f"/watchlists/{args.watchlist_id}", json={"name": args.name})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_watchlists_delete(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.delete(f"/watchlists/{args.watchlist_id}")
    r.raise_for_status()
    print(f"Deleted {args.watchlist_id}")
    return 0


def cmd_watchlists_import(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.post(f"/watchlists/{args.watchlist_id}/import", json={"query": args.query})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_watchlists_note(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.put(
        f"/watchlists/{args.watchlist_id}/notes/{args.coin_id}",
        json={"text": args.text},
    )
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_settings_list(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/settings/refresh-configs")
    r.raise_for_status()
    for config in r.json():
        state = "on " if config["enabled"] else "off"
        print(f"{config['id']:<11} {state} {config['interval']:>5}  {config['name']}")
    return 0


def _patch_config(client: httpx.Client, config_id: str, body: dict) -> int:
    r = client.patch(f"/settings/refresh-configs/{config_id}", json=body)
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_settings_toggle(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/settings/refresh-configs")
    r.raise_for_status()
    current = next((c for c in r.json() if c["id"] == args.config_id), None)
    if current is None:
        print(f"Unknown refresh config: {args.config_id}", file=sys.stderr)
        return 1
    return _patch_config(client, args.config_id, {"enabled": not current["enabled"]})


def cmd_settings_interval(client: httpx.Client, args: argparse.Namespace) -> int:
    return _patch_config(client, args.config_id, {"interval": args.interval})


def cmd_dashboard_state(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/dashboard")
    r.raise_for_status()
    data = r.json()
    print(f"{data['title']} ({data['view']}): {len(data['rows'])} rows", file=sys.stderr)
    if args.head:
        data["rows"] = data["rows"][: args.head]
    print_json(data)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Exercise crypto_dashboard API routes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8001",
        help="API base URL (default: http://localhost:8001)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    # health
    subparsers.add_parser("health", help="GET / health check")

    # assets
    assets = subparsers.add_parser("assets", help="Asset routes (/assets)")
    assets_sub = assets.add_subparsers(dest="assets_cmd", required=True)
    p = assets_sub.add_parser("list", help="GET /assets")
    p.add_argument("--head", type=int, default=0, help="Show only first N (0 = all)")
    p = assets_sub.add_parser("search", help="GET /assets/search")
    p.add_argument("query", help="Tickers or names (e.g. 'BTC, eth')")
    p = assets_sub.add_parser("table", help="GET /assets/table")
    p.add_argument("--search", default="", help="Substring of name or symbol")
    p.add_argument("--sort-key", default="change_24h", help="Numeric field to sort by")
    p.add_argument("--direction", choices=["asc", "desc"], default="desc")
    p.add_argument("--movement", choices=["all", "gainers", "losers"], default="all")
    p.add_argument("--category", default=None, help="Narrative filter (e.g. Meme)")
    p.add_argument("--watchlist", default=None, help="Scope to a watchlist id")
    p.add_argument("--head", type=int, default=0, help="Show only first N (0 = all)")
    p = assets_sub.add_parser("trends", help="GET /assets/trends")
    p.add_argument("--count", action="store_true", help="Show asset counts instead of scores")
    assets_sub.add_parser("refresh", help="POST /assets/refresh")

    # watchlists
    wl = subparsers.add_parser("watchlists", help="Watchlist routes (/watchlists)")
    wl_sub = wl.add_subparsers(dest="watchlists_cmd", required=True)
    wl_sub.add_parser("list", help="GET /watchlists")
    p = wl_sub.add_parser("create", help="POST /watchlists")
    p.add_argument("name")
    p = wl_sub.add_parser("rename", help="PATCH /watchlists/{id}")
    p.add_argument("watchlist_id")
    p.add_argument("name")
    p = wl_sub.add_parser("delete", help="DELETE /watchlists/{id}")
    p.add_argument("watchlist_id")
    p = wl_sub.add_parser("import", help="POST /watchlists/{id}/import")
    p.add_argument("watchlist_id")
    p.add_argument("query", help="Tickers or names (e.g. 'SOL, PEPE')")
    p = wl_sub.add_parser("note", help="PUT /watchlists/{id}/notes/{coin_id}")
    p.add_argument("watchlist_id")
    p.add_argument("coin_id")
    p.add_argument("text", nargs="?", default="")

    # settings
    settings = subparsers.add_parser("settings", help="Refresh config routes (/settings)")
    settings_sub = settings.add_subparsers(dest="settings_cmd", required=True)
    settings_sub.add_parser("list", help="GET /settings/refresh-configs")
    p = settings_sub.add_parser("toggle", help="Flip a stream's enabled flag")
    p.add_argument("config_id", help="price, change, volume, marketCap or categories")
    p = settings_sub.add_parser("interval", help="Set a stream's interval")
    p.add_argument("config_id")
    p.add_argument("interval", help="One of the stream's allowed intervals (e.g. 30s)")

    # dashboard
    dash = subparsers.add_parser("dashboard", help="Session state (/dashboard)")
    dash_sub = dash.add_subparsers(dest="dashboard_cmd", required=True)
    p = dash_sub.add_parser("state", help="GET /dashboard")
    p.add_argument("--head", type=int, default=0, help="Show only first N rows (0 = all)")

    args = parser.parse_args()
    base_url = args.base_url.rstrip("/")

    handlers = {
        "health": cmd_health,
        "assets": {
            "list": cmd_assets_list,
            "search": cmd_assets_search,
            "table": cmd_assets_table,
            "trends": cmd_assets_trends,
            "refresh": cmd_assets_refresh,
        },
        "watchlists": {
            "list": cmd_watchlists_list,
            "create": cmd_watchlists_create,
            "rename": cmd_watchlists_rename,
            "delete": cmd_watchlists_delete,
            "import": cmd_watchlists_import,
            "note": cmd_watchlists_note,
        },
        "settings": {
            "list": cmd_settings_list,
            "toggle": cmd_settings_toggle,
            "interval": cmd_settings_interval,
        },
        "dashboard": {
            "state": cmd_dashboard_state,
        },
    }

    cmd = args.command
    if cmd == "health":
        handler = handlers["health"]
    else:
        sub = getattr(args, f"{cmd}_cmd", None)
        if sub is None:
            parser.error(f"Missing subcommand for {cmd}")
        handler = handlers[cmd][sub]

    try:
        with httpx.Client(base_url=base_url, timeout=args.timeout) as client:
            return handler(client, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
