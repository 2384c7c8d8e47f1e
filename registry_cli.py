import argparse
import logging
import os
import sys

from patient_index import PatientRegistry, TraversalOrder
from patient_index.models.exceptions import RecordFormatError

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()

ORDERS = {
    "in": TraversalOrder.IN_ORDER,
    "pre": TraversalOrder.PRE_ORDER,
    "post": TraversalOrder.POST_ORDER,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query and export the patient index.")
    parser.add_argument(
        "--storage-dir",
        default=os.environ.get("PATIENT_INDEX_DIR", "data/"),
        help="Directory holding the data files (env: PATIENT_INDEX_DIR)",
    )
    parser.add_argument("--data-file", default=PatientRegistry.DEFAULT_DATA_FILE)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("stats", help="Print size and depth of the index")

    search = sub.add_parser("search", help="Look up a patient by e-mail")
    search.add_argument("email")

    query = sub.add_parser("query", help="Vaccination tallies for a state or zip code")
    group = query.add_mutually_exclusive_group(required=True)
    group.add_argument("--state")
    group.add_argument("--zip")

    dump = sub.add_parser("dump", help="Print every record in a traversal order")
    dump.add_argument("--order", choices=sorted(ORDERS), default="in")

    export = sub.add_parser("export", help="Write the index back to disk in key order")
    export.add_argument("--output", default=PatientRegistry.DEFAULT_EXPORT_FILE)

    return parser


def run(args: argparse.Namespace) -> int:
    registry = PatientRegistry(args.storage_dir, data_file=args.data_file)
    registry.load()

    if args.command == "stats":
        print(f"patients: {registry.size()}")
        print(f"depth: {registry.depth()}")
    elif args.command == "search":
        patient = registry.search_patient(args.email)
        if patient is None:
            print(f"No patient with e-mail {args.email}")
            return 1
        print(patient.to_data_string())
    elif args.command == "query":
        result = registry.query(state=args.state, zip=args.zip)
        if registry.is_empty():
            print("No patients in the database.")
        else:
            print(result.summary())
            for patient in result.patients:
                print(f"  {patient.full_name} <{patient.email}>")
    elif args.command == "dump":
        for patient in registry.traverse(ORDERS[args.order]):
            print(patient.to_data_string())
    elif args.command == "export":
        registry.save(args.output)

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except RecordFormatError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
