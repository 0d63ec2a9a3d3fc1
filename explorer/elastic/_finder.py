from __future__ import annotations

from explorer.command import SearchCommand
from explorer.results import Results

from ._transport import AsyncTransport, Transport


class Finder:
    """Runs a search command through a transport."""

    transport: Transport | AsyncTransport
    command: SearchCommand

    def __init__(
        self,
        transport: Transport | AsyncTransport,
        command: SearchCommand,
    ):
        self.transport = transport
        self.command = command

    def find(self) -> Results:
        index = self.command.get_index()
        document = self.command.build_query()
        return Results(self.transport.execute(document, index))

    async def afind(self) -> Results:
        index = self.command.get_index()
        document = self.command.build_query()
        return Results(await self.transport.aexecute(document, index))
