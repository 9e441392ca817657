import argparse
import sys

from app.config import settings
from app.config.log_config import configure_logging
from app.models.report import GroupKey
from app.services.board import render_board
from app.services.client import ReportClient
from app.services.grouping import ALL_BUILDINGS, ALL_CONCERNS, BoardState, build_view


def build_parser():
    parser = argparse.ArgumentParser(description="Show the facilities report board")
    parser.add_argument("--building", default=ALL_BUILDINGS)
    parser.add_argument("--concern", default=ALL_CONCERNS)
    parser.add_argument("--show-duplicates", action="store_true")
    parser.add_argument("--group", nargs=2, metavar=("BUILDING", "CONCERN"),
                        help="Show every report of one building/concern group")
    parser.add_argument("--base-url", default=settings.API_BASE_URL)
    return parser


def main(argv=None):
    configure_logging()
    args = build_parser().parse_args(argv)

    client = ReportClient(args.base_url)
    reports = client.fetch_reports()

    state = BoardState().with_building(args.building).with_concern(args.concern)
    if args.show_duplicates:
        state = state.toggle_duplicates()
    if args.group:
        state = state.select_group(GroupKey(*args.group))

    print(render_board(build_view(reports, state), client.image_url), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
