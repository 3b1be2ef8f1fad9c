"""Top page object."""

from __future__ import annotations

from .base_page import BasePage


class IndexPage(BasePage):
    async def goto(self) -> None:
        await self.page.goto(self.config.url("index"))
