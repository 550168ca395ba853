"""Entry point for the order-memo Textual app."""

from __future__ import annotations

from order_memo.config import setup_logging
from order_memo.memo_app import OrderMemoApp


def main() -> None:
    logger = setup_logging()
    logger.info("starting order memo")
    OrderMemoApp().run()


if __name__ == "__main__":
    main()
