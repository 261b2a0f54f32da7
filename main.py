#!/usr/bin/env python3
"""
Arudeal - Admin CLI
===================
Command-line front end for the dealership backend: catalog search,
inventory and accessory management, third-party / auction ingestion,
taxonomy and banner upkeep, seller listings and user roles.

Examples:
    arudeal search "toyota 2020"
    arudeal vehicles list --search camry --sort price-desc
    arudeal auction fetch --csv seeds.csv --filter 12
    arudeal taxonomy makes add --name Toyota --image toyota.png
    arudeal users assign <user_id> <role_id>
"""

import argparse
import os
import sys
from typing import List, Optional

from config import Config
from arudeal.api import ApiClient, ArudealError, TokenStore
from arudeal.import_export import export_rows
from arudeal.notifications import NotificationManager
from arudeal.schema import (
    AccessoryForm,
    AuctionFetchParams,
    BannerForm,
    BulkUpdate,
    ListingStatus,
    TaxonomyForm,
    ThirdPartyFetchParams,
)
from arudeal.search import CatalogSearch
from arudeal.services import (
    AccessoryService,
    AuctionService,
    BannerService,
    DashboardService,
    SellerListingService,
    TAXONOMIES,
    TaxonomyService,
    ThirdPartyService,
    UserRoleService,
    VehicleService,
)
from arudeal.adapters import ThirdPartyAdapter
from arudeal.views import (
    CatalogFilters,
    ListView,
    catalog_search,
    price_badge,
    sort_by_make_priority,
    sort_items,
)
from arudeal.workflows import (
    AccessoryManagerScreen,
    AuctionScreen,
    BannerScreen,
    SellerListingsScreen,
    TaxonomyScreen,
    ThirdPartyScreen,
    UserRoleScreen,
    VehicleManagerScreen,
)


def print_header(title: str):
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)


def format_price(price: Optional[float]) -> str:
    if price is None:
        return "-"
    return f"AWG {price:,.0f}"


def make_client(base_url: Optional[str] = None) -> ApiClient:
    return ApiClient.from_config(Config, base_url=base_url)


def print_pager(view: ListView):
    if view.is_empty:
        print(f"\n📭 {view.message}")
        return
    pages = " ".join(str(p) if p != view.page else f"[{p}]" for p in view.paginator.window())
    print(f"\nPage {view.page}/{view.page_count}  {pages}  ({len(view.filtered)} results)")


def exit_code(result) -> int:
    return 0 if result.success else 1


# Search / catalog

def cmd_search(args) -> int:
    print_header(f"🔎 SEARCH: {args.query}")
    search = CatalogSearch(make_client(), source_limit=Config.SEARCH_SOURCE_LIMIT).load()

    if search.failed_sources:
        print(f"⚠️  Unavailable sources: {', '.join(search.failed_sources)}")

    suggestions = search.suggest(args.query, limit=args.limit)
    if not suggestions:
        print("\n📭 No matches")
    for doc in suggestions:
        print(f"  • {doc.title:<40} {format_price(doc.price):>14}  [{doc.source.value}]")

    route = search.submit(args.query)
    if route:
        print(f"\n➡️  {route}")
    return 0


def cmd_catalog(args) -> int:
    docs = ThirdPartyAdapter(make_client()).fetch_documents(limit=Config.SEARCH_SOURCE_LIMIT)
    docs = sort_by_make_priority(docs)
    docs = CatalogFilters(
        make=args.make or "",
        model=args.model or "",
        type=args.type or "",
        color=args.color or "",
        location=args.location or "",
        fuel_type=args.fuel_type or "",
        price_range=args.price_range or "",
    ).apply(docs)
    docs = catalog_search(docs, args.search or "")
    docs = sort_items(docs, args.sort)

    view = ListView(docs, page_size=Config.PAGE_SIZE)
    view.go_to(args.page)

    title = f'Search Results for "{args.search.strip()}"' if (args.search or "").strip() else "USA Listings"
    print_header(f"🚗 {title}")
    for doc in view.rows:
        badge = price_badge(doc.price)
        print(f"  • {doc.title:<40} {format_price(doc.price):>14}  {badge or ''}")
    print_pager(view)
    return 0


# Inventory

def cmd_vehicles(args) -> int:
    notifier = NotificationManager(echo=True)
    screen = VehicleManagerScreen(VehicleService(make_client()), notifier, page_size=Config.PAGE_SIZE)

    if args.action == "list":
        if not screen.load().success:
            return 1
        screen.search(args.search or "")
        screen.view.sort_by(args.sort)
        screen.view.go_to(args.page)
        print_header("🚗 VEHICLES")
        for v in screen.vehicles:
            flags = ("SOLD " if v.is_sold else "") + ("" if v.is_active else "INACTIVE ") + ("★" if v.is_featured else "")
            print(f"  {v.id:<26} {v.title:<36} {format_price(v.price):>14}  {flags}")
        print_pager(screen.view)
        return 0

    if args.action in ("sold", "active", "feature", "delete") and not args.ids:
        print("❌ Give a vehicle id")
        return 1
    if args.action == "sold":
        return exit_code(screen.set_sold(args.ids[0], sold=not args.undo))
    if args.action == "active":
        return exit_code(screen.set_active(args.ids[0], active=not args.undo))
    if args.action == "feature":
        return exit_code(screen.set_featured(args.ids[0], featured=not args.undo))
    if args.action == "delete":
        return exit_code(screen.delete(args.ids[0]))

    for vehicle_id in args.ids:
        screen.selection.toggle(vehicle_id)
    batch = {
        "batch-sold": screen.batch_mark_sold,
        "batch-active": screen.batch_mark_active,
        "batch-delete": screen.batch_delete,
    }[args.action]
    return exit_code(batch())


# Accessories

def cmd_accessories(args) -> int:
    notifier = NotificationManager(echo=True)
    screen = AccessoryManagerScreen(AccessoryService(make_client()), notifier)

    if args.action == "list":
        if not screen.load().success:
            return 1
        screen.search_text = args.search or ""
        screen.category_filter = args.category
        print_header("🧰 ACCESSORIES")
        for a in screen.visible:
            stock = "out of stock" if a.out_of_stock else f"{a.stock} in stock"
            print(f"  {a.id:<26} {a.name:<30} {a.brand or '-':<16} {format_price(a.price):>12}  {stock}")
        if not screen.visible:
            print("\n📭 No accessories found")
        return 0

    if args.action == "categories":
        if not screen.load_categories().success:
            return 1
        print_header("🗂️  CATEGORIES")
        for c in screen.categories:
            print(f"  {c.id:<26} {c.name}")
        return 0

    if args.action == "save":
        screen.open_new()
        screen.editing_id = args.id
        screen.form = AccessoryForm(
            name=args.name or "",
            brand=args.brand or "",
            price=args.price,
            stock=args.stock,
            category_id=args.category,
            sub_category_id=args.sub_category,
            description=args.description or "",
            tags=args.tag or [],
            model_compatibility=args.model or [],
        )
        images = [(os.path.basename(path), open(path, "rb"), "image/jpeg") for path in args.image or []]
        try:
            return exit_code(screen.save(images=images))
        finally:
            for _, fh, _ in images:
                fh.close()

    if args.action == "delete":
        return exit_code(screen.delete(args.id))
    return 1


# Ingestion

def _print_admin_listings(screen, title: str):
    print_header(title)
    stats = screen.stats
    print(f"Total value: {format_price(stats.total_value)}   Listings: {stats.count}   Makes: {stats.makes}")
    for l in screen.listings:
        active = "active" if l.is_active else "inactive"
        print(f"  {l.id:<26} {l.title:<36} {format_price(l.price):>14}  {l.status:<9} {active}")
    if not screen.listings:
        print(f"\n📭 {screen.view.empty_message}")
    else:
        print(f"\nPage {screen.pagination.page}/{screen.pagination.page_count}")


def cmd_third_party(args) -> int:
    notifier = NotificationManager(echo=True)
    screen = ThirdPartyScreen(ThirdPartyService(make_client()), notifier)

    if args.action == "list":
        if not screen.load(args.page).success:
            return 1
        screen.search(args.search or "")
        _print_admin_listings(screen, "🌐 THIRD-PARTY LISTINGS")
        return 0

    params = ThirdPartyFetchParams(
        make=args.make or "",
        model=args.model or "",
        year=args.year or "",
        trim=args.trim or "",
        engine=args.engine or "",
        price=args.price or "",
        miles=args.miles or "",
        limit=args.limit,
        page=args.page,
    )
    return exit_code(screen.start_fetch(params))


def _auction_params(args) -> AuctionFetchParams:
    return AuctionFetchParams(
        limit=args.limit,
        year=args.year or "",
        make=args.make or "",
        fuel_type=args.fuel_type or "",
        transmission=args.transmission or "",
        sale_title_type=args.sale_title_type or "",
        est_retail_value=args.est_retail_value or "",
    )


def cmd_auction(args) -> int:
    notifier = NotificationManager(echo=True)
    screen = AuctionScreen(AuctionService(make_client()), notifier)

    if args.action == "list":
        if not screen.load(args.page).success:
            return 1
        screen.search(args.search or "")
        _print_admin_listings(screen, "🔨 AUCTION LISTINGS")
        return 0

    if args.action == "filters":
        if not screen.load_filters().success:
            return 1
        print_header("💾 SAVED FILTERS")
        for f in screen.saved_filters:
            print(f"  {f.id:<26} {f.title:<24} {f.summary()}")
        if not screen.saved_filters:
            print("\n📭 No saved filters")
        return 0

    if args.action == "save-filter":
        screen.fetch_params = _auction_params(args)
        screen.selected_filter_id = args.id
        return exit_code(screen.save_filter(args.title))

    if args.action == "delete-filter":
        return exit_code(screen.delete_filter(args.id))

    if args.action == "fetch":
        screen.fetch_params = _auction_params(args)
        if args.filter:
            if not screen.load_filters().success:
                return 1
            saved = next((f for f in screen.saved_filters if f.id == args.filter), None)
            if saved is None:
                print(f"❌ Saved filter not found: {args.filter}")
                return 1
            screen.apply_filter(saved)
        return exit_code(screen.execute_fetch(args.csv))

    for listing_id in args.ids:
        screen.selection.toggle(listing_id)

    if args.action == "update":
        update = BulkUpdate(
            is_active=not args.inactive,
            is_featured=args.featured,
            status=ListingStatus(args.status),
        )
        return exit_code(screen.bulk_update(update))
    if args.action == "delete":
        return exit_code(screen.bulk_delete())
    if args.action == "toggle":
        if not args.ids:
            print("❌ Give a listing id")
            return 1
        return exit_code(screen.toggle_active(args.ids[0], not args.inactive))
    return 1


# Taxonomy / banners / seller listings

def _open_image(path: Optional[str]):
    if not path:
        return None
    return (os.path.basename(path), open(path, "rb"), "image/jpeg")


def cmd_taxonomy(args) -> int:
    notifier = NotificationManager(echo=True)
    screen = TaxonomyScreen(TaxonomyService.for_name(make_client(), args.kind), notifier)

    if args.action == "list":
        if not screen.load().success:
            return 1
        print_header(f"🏷️  {screen.label.upper()}S")
        for item in screen.items:
            make = f"  [{item.make_name}]" if item.make_name else ""
            print(f"  {item.id:<26} {item.name}{make}")
        if not screen.items:
            print("\n📭 Nothing here yet")
        return 0

    if args.action in ("update", "delete") and not args.id:
        print("❌ --id is required")
        return 1
    if args.action == "delete":
        return exit_code(screen.delete(args.id))

    screen.open_new()
    screen.editing_id = args.id if args.action == "update" else None
    screen.form = TaxonomyForm(name=args.name or "", make_id=args.make_id)
    image = _open_image(args.image)
    try:
        return exit_code(screen.save(image=image))
    finally:
        if image:
            image[1].close()


def cmd_banners(args) -> int:
    notifier = NotificationManager(echo=True)
    screen = BannerScreen(BannerService(make_client()), notifier)

    if args.action == "list":
        if not screen.load().success:
            return 1
        print_header("🖼️  BANNERS")
        for b in screen.banners:
            shown = "shown" if b.is_display else "hidden"
            print(f"  {b.id:<26} {b.name:<30} pos {b.position if b.position is not None else '-':<4} {shown}")
        return 0

    if args.action in ("update", "delete") and not args.id:
        print("❌ --id is required")
        return 1
    if args.action == "delete":
        return exit_code(screen.delete(args.id))

    screen.open_new()
    if args.action == "update":
        # keep the fields that were not given
        if not screen.load().success:
            return 1
        current = next((b for b in screen.banners if b.id == args.id), None)
        if current is None:
            print(f"❌ Banner not found: {args.id}")
            return 1
        screen.open_edit(current)
    if args.name is not None:
        screen.form.name = args.name
    if args.position is not None:
        screen.form.position = args.position
    image = _open_image(args.image)
    try:
        return exit_code(screen.save(image=image))
    finally:
        if image:
            image[1].close()


def cmd_seller(args) -> int:
    notifier = NotificationManager(echo=True)
    screen = SellerListingsScreen(SellerListingService(make_client()), notifier, size=args.size)

    if args.action == "list":
        if not screen.load().success:
            return 1
        print_header("🚘 MY LISTINGS")
        for v in screen.listings:
            status = "sold" if v.is_sold else ("active" if v.is_active else "inactive")
            print(f"  {v.id:<26} {v.title:<36} {format_price(v.price):>14}  {status}")
        if not screen.listings:
            print("\n📭 No listings yet")
        return 0

    if not args.id:
        print("❌ --id is required")
        return 1
    changes = dict(item.split("=", 1) for item in args.set or [] if "=" in item)
    return exit_code(screen.update(args.id, changes))


# Users / dashboard / export

def cmd_users(args) -> int:
    notifier = NotificationManager(echo=True)
    screen = UserRoleScreen(UserRoleService(make_client(Config.USER_API_URL)), notifier)

    if args.action == "list":
        if not screen.load(args.email or "").success:
            return 1
        print_header("👥 USERS")
        for u in screen.users:
            print(f"  {u.id:<38} {u.full_name:<28} {u.email:<32} {u.role_name or '-'}")
        return 0
    if args.action == "roles":
        if not screen.load_roles().success:
            return 1
        print_header("🔑 ROLES")
        for r in screen.roles:
            print(f"  {r.id:<38} {r.name}")
        return 0
    if args.action == "assign":
        return exit_code(screen.assign_role(args.user_id, args.role_id))
    if args.action == "remove":
        return exit_code(screen.remove_role(args.user_id))
    return 1


def cmd_dashboard(args) -> int:
    service = DashboardService(make_client())
    if not args.seller:
        summary = service.summary()
        print_header("📊 DASHBOARD")
        for key, value in summary.items():
            print(f"  {key:<28} {value}")
        return 0

    stats = service.seller_stats()
    print_header("📊 SELLER DASHBOARD")
    print(f"Total listings:  {stats.total_listings}")
    print(f"Active listings: {stats.active_listings}")
    print(f"Sold listings:   {stats.sold_listings}")
    print(f"Total revenue:   {format_price(stats.total_revenue)}")
    print("\nTop makes: " + ", ".join(f"{name} ({count})" for name, count in stats.makes))
    print("Top body types: " + ", ".join(f"{name} ({count})" for name, count in stats.body_types))
    return 0


def cmd_export(args) -> int:
    client = make_client()
    if args.source == "vehicles":
        rows = VehicleService(client).list(page=1, size=Config.SEARCH_SOURCE_LIMIT).items
    elif args.source == "third-party":
        rows = ThirdPartyService(client).list(page=1, size=Config.SEARCH_SOURCE_LIMIT).items
    else:
        rows = AuctionService(client).list(page=1, size=Config.SEARCH_SOURCE_LIMIT).items

    content = export_rows(rows)
    if args.out:
        with open(args.out, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        print(f"✅ Exported {len(rows)} row(s) to {args.out}")
    else:
        sys.stdout.write(content)
    return 0


def cmd_token(args) -> int:
    store = TokenStore(Config.TOKEN_FILE)
    if args.action == "set":
        store.set("access_token", args.token)
        print("✅ Access token saved")
    else:
        store.clear()
        print("✅ Session cleared")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arudeal", description="Dealership admin toolkit")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search", help="Fuzzy search across all listing sources")
    p.add_argument("query")
    p.add_argument("--limit", type=int, default=10)
    p.set_defaults(func=cmd_search)

    p = sub.add_parser("catalog", help="Public catalog view of third-party listings")
    p.add_argument("--search")
    p.add_argument("--sort", default="date-desc")
    p.add_argument("--page", type=int, default=1)
    for facet in ("make", "model", "type", "color", "location", "fuel-type", "price-range"):
        p.add_argument(f"--{facet}")
    p.set_defaults(func=cmd_catalog)

    p = sub.add_parser("vehicles", help="Inventory listings")
    p.add_argument("action", choices=[
        "list", "sold", "active", "feature", "delete", "batch-sold", "batch-active", "batch-delete",
    ])
    p.add_argument("ids", nargs="*")
    p.add_argument("--search")
    p.add_argument("--sort")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--undo", action="store_true", help="Reverse sold/active/feature")
    p.set_defaults(func=cmd_vehicles)

    p = sub.add_parser("accessories", help="Car accessories")
    p.add_argument("action", choices=["list", "categories", "save", "delete"])
    p.add_argument("--id")
    p.add_argument("--search")
    p.add_argument("--category")
    p.add_argument("--sub-category")
    p.add_argument("--name")
    p.add_argument("--brand")
    p.add_argument("--price", type=float, default=0)
    p.add_argument("--stock", type=int, default=0)
    p.add_argument("--description")
    p.add_argument("--tag", action="append")
    p.add_argument("--model", action="append")
    p.add_argument("--image", action="append")
    p.set_defaults(func=cmd_accessories)

    p = sub.add_parser("third-party", help="Third-party API listings")
    p.add_argument("action", choices=["list", "fetch"])
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--search")
    p.add_argument("--limit", type=int, default=50)
    for name in ("make", "model", "year", "trim", "engine", "price", "miles"):
        p.add_argument(f"--{name}")
    p.set_defaults(func=cmd_third_party)

    p = sub.add_parser("auction", help="Auction listings and saved filters")
    p.add_argument("action", choices=[
        "list", "filters", "save-filter", "delete-filter", "fetch", "update", "delete", "toggle",
    ])
    p.add_argument("ids", nargs="*")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--search")
    p.add_argument("--id", help="Saved filter id")
    p.add_argument("--title")
    p.add_argument("--filter", help="Apply a saved filter before fetching")
    p.add_argument("--csv", help="CSV seed file")
    p.add_argument("--limit", type=int, default=5)
    for name in ("year", "make", "fuel-type", "transmission", "sale-title-type", "est-retail-value"):
        p.add_argument(f"--{name}")
    p.add_argument("--inactive", action="store_true")
    p.add_argument("--featured", action="store_true")
    p.add_argument("--status", default=ListingStatus.APPROVED.value,
                   choices=[s.value for s in ListingStatus])
    p.set_defaults(func=cmd_auction)

    p = sub.add_parser("taxonomy", help="Makes, models, engines, fuel types, transmissions, body types")
    p.add_argument("kind", choices=list(TAXONOMIES))
    p.add_argument("action", choices=["list", "add", "update", "delete"])
    p.add_argument("--id")
    p.add_argument("--name")
    p.add_argument("--make-id", help="Make of a car model")
    p.add_argument("--image", help="Logo / image file")
    p.set_defaults(func=cmd_taxonomy)

    p = sub.add_parser("banners", help="Home-page banners")
    p.add_argument("action", choices=["list", "add", "update", "delete"])
    p.add_argument("--id")
    p.add_argument("--name")
    p.add_argument("--position", type=int)
    p.add_argument("--image")
    p.set_defaults(func=cmd_banners)

    p = sub.add_parser("seller", help="Your own listings")
    p.add_argument("action", choices=["list", "update"])
    p.add_argument("--id")
    p.add_argument("--size", type=int, default=20)
    p.add_argument("--set", action="append", metavar="FIELD=VALUE")
    p.set_defaults(func=cmd_seller)

    p = sub.add_parser("users", help="User roles")
    p.add_argument("action", choices=["list", "roles", "assign", "remove"])
    p.add_argument("user_id", nargs="?")
    p.add_argument("role_id", nargs="?")
    p.add_argument("--email")
    p.set_defaults(func=cmd_users)

    p = sub.add_parser("dashboard", help="Dashboard summary")
    p.add_argument("--seller", action="store_true", help="Stats for your own listings")
    p.set_defaults(func=cmd_dashboard)

    p = sub.add_parser("export", help="Export listings to CSV")
    p.add_argument("source", choices=["vehicles", "third-party", "auction"])
    p.add_argument("--out")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("token", help="Store or clear the access token")
    p.add_argument("action", choices=["set", "clear"])
    p.add_argument("token", nargs="?")
    p.set_defaults(func=cmd_token)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "token" and args.action == "set" and not args.token:
        parser.error("token set needs a token")

    try:
        return args.func(args)
    except (ArudealError, OSError) as e:
        print(f"\n❌ {e}")
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n👋 Interrupted by user. Goodbye!")
        sys.exit(0)
