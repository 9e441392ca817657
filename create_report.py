import argparse
import sys

from app.config import settings
from app.config.log_config import configure_logging
from app.services.client import ReportClient


def _choice(options):
    def check(value):
        if value not in options:
            raise argparse.ArgumentTypeError(f"choose one of: {', '.join(options)}")
        return value
    return check


def build_parser():
    parser = argparse.ArgumentParser(description="Create a facilities report")
    parser.add_argument("--heading", required=True)
    parser.add_argument("--description", required=True)
    parser.add_argument("--concern", required=True, type=_choice(settings.CONCERN_OPTIONS))
    parser.add_argument("--building", required=True, type=_choice(settings.BUILDING_OPTIONS))
    parser.add_argument("--image", help="Path to an image to attach")
    parser.add_argument("--base-url", default=settings.API_BASE_URL)
    return parser


def main(argv=None):
    configure_logging()
    args = build_parser().parse_args(argv)

    client = ReportClient(args.base_url)
    result = client.submit_report(args.heading, args.description, args.concern, args.building, args.image)
    print(result.message)
    if result.report:
        print("Report id:", result.report.id)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
