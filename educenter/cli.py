import argparse
import json
import logging
import sys
from pathlib import Path

from educenter.api.deps import get_snapshot_service
from educenter.domain.errors import DomainError
from educenter.ports.store import StoreBusyError
from educenter.services.snapshot import SnapshotService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("cli")


def handle_export(service: SnapshotService, args: argparse.Namespace) -> None:
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        json.dump(service.load().to_wire(), f, ensure_ascii=False, indent=2)
    print(f"Exported snapshot to {out}")


def handle_restore(service: SnapshotService, args: argparse.Namespace) -> None:
    path = Path(args.file)
    if not path.exists():
        logger.error("Backup file %s not found.", path)
        sys.exit(1)
    with open(path, encoding="utf-8") as f:
        document = json.load(f)
    snapshot = service.restore(document)
    print(f"Restored {len(snapshot.students)} students from {path}")


def handle_reset(service: SnapshotService, args: argparse.Namespace) -> None:
    service.reset()
    print("Data reset to the default dataset.")


def handle_monthly(service: SnapshotService, args: argparse.Namespace) -> None:
    op = "generateInvoices" if args.command == "invoices" else "generatePayrolls"
    snapshot = service.apply({"op": op, "payload": {"month": args.month, "year": args.year}})
    month_str = f"{args.year}-{args.month:02d}"
    if op == "generateInvoices":
        count = sum(1 for i in snapshot.invoices if i.month == month_str)
        print(f"{count} invoices for {month_str}.")
    else:
        count = sum(1 for p in snapshot.payrolls if p.month == month_str)
        print(f"{count} payrolls for {month_str}.")


def main() -> None:
    parser = argparse.ArgumentParser(description="EduCenter CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Write the snapshot to a JSON file")
    export_parser.add_argument("--out", default="backups/educenter.json")

    restore_parser = subparsers.add_parser("restore", help="Replace the snapshot from a JSON file")
    restore_parser.add_argument("file")

    subparsers.add_parser("reset", help="Restore the default dataset")

    for name, help_text in (("invoices", "Generate monthly invoices"),
                            ("payrolls", "Generate monthly payrolls")):
        monthly = subparsers.add_parser(name, help=help_text)
        monthly.add_argument("--month", type=int, required=True)
        monthly.add_argument("--year", type=int, required=True)

    args = parser.parse_args()
    handlers = {
        "export": handle_export,
        "restore": handle_restore,
        "reset": handle_reset,
        "invoices": handle_monthly,
        "payrolls": handle_monthly,
    }

    try:
        handlers[args.command](get_snapshot_service(), args)
    except DomainError as e:
        logger.error("Operation failed: %s", e.message)
        sys.exit(1)
    except StoreBusyError as e:
        logger.error("%s", e)
        sys.exit(2)


if __name__ == "__main__":
    main()
