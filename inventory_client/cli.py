from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional, Sequence

from inventory_client.api import ApiError, InventoryApiClient
from inventory_client.controller import InventoryController
from inventory_client.form import ProductForm
from inventory_client.state import FilterChanged, InventoryState, SearchChanged


async def _ask(message: str) -> bool:
    # input() blocks; keep it off the event loop
    answer = await asyncio.to_thread(input, f"{message} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def render_products(state: InventoryState, out=None) -> None:
    out = out or sys.stdout
    if state.notice:
        print(state.notice, file=out)
    if not state.products and state.has_active_filters:
        print("No products match the current filters.", file=out)
    elif not state.products:
        print("No products found. Add one to get started!", file=out)
    for p in state.products:
        names = ", ".join(c.get("name", "?") for c in p.get("categories", []))
        print(f"{p['id']}  {p['name']:<30} qty={p['quantity']:<6} [{names}]", file=out)
    if state.total_pages > 0:
        print(f"Page {state.current_page} of {state.total_pages} ({state.total_items} products)", file=out)


def render_categories(categories: Sequence[Dict[str, Any]], out=None) -> None:
    out = out or sys.stdout
    for c in categories:
        print(f"{c['id']}  {c['name']:<16} {c.get('description') or ''}", file=out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="inventory-client", description="Inventory service client")
    parser.add_argument("--api-url", default=None, help="Base API url (default: $INVENTORY_API_URL)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("categories", help="List categories")

    p_list = sub.add_parser("list", help="List products")
    p_list.add_argument("--page", type=int, default=1)
    p_list.add_argument("--search", default="")
    p_list.add_argument("--category", action="append", default=[], help="Category id (repeatable)")

    p_add = sub.add_parser("add", help="Add a product")
    p_add.add_argument("--name", required=True)
    p_add.add_argument("--description", required=True)
    p_add.add_argument("--quantity", required=True)
    p_add.add_argument("--category", action="append", default=[], help="Category id (repeatable)")

    p_del = sub.add_parser("delete", help="Delete a product")
    p_del.add_argument("product_id")
    p_del.add_argument("--yes", action="store_true", help="Skip confirmation")

    return parser


async def run(args: argparse.Namespace) -> int:
    async with InventoryApiClient(base_url=args.api_url) as api:
        confirm = None if getattr(args, "yes", False) else _ask
        ctl = InventoryController(api, confirm=confirm)

        if args.command == "categories":
            await ctl.load_categories()
            render_categories(ctl.state.categories)
            return 0

        if args.command == "list":
            # set both filters first so that only one page is fetched
            ctl.dispatch(SearchChanged(args.search))
            ctl.dispatch(FilterChanged(frozenset(args.category)))
            await ctl.go_to_page(args.page)
            render_products(ctl.state)
            return 0

        if args.command == "add":
            form = ProductForm(name=args.name, description=args.description, quantity=args.quantity)
            for cid in args.category:
                form = form.toggle_category(cid)
            form = await ctl.submit_form(form)
            if form.errors:
                for field, message in form.errors.items():
                    print(f"{field}: {message}", file=sys.stderr)
                return 1
            render_products(ctl.state)
            return 0

        if args.command == "delete":
            try:
                product = await api.get_product(args.product_id)
            except ApiError as e:
                print(e.message, file=sys.stderr)
                return 1
            ok = await ctl.delete_product(args.product_id, product["name"])
            if ctl.state.alert:
                print(ctl.state.alert, file=sys.stderr)
                return 1
            if ok:
                print(ctl.state.notice)
            return 0

    return 2


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
