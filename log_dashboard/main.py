import argparse

import flet as ft

from log_dashboard.app import DashboardApp


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Log Dashboard")
    parser.add_argument("log", nargs="?", default=None, help="Log file to open")
    # Use parse_known_args to avoid conflict with Flet arguments
    args, _ = parser.parse_known_args(argv)
    return args


async def main(page: ft.Page):
    app = DashboardApp(page)
    args = parse_args()
    await app.start(args.log)


def run():
    ft.run(main)


if __name__ == "__main__":
    run()
