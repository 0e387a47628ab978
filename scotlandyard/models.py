"""
Pydantic Models for Scotland Yard Game State
Value types shared by the move generator, turn processor and win evaluator.
"""

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


# Location 0 is never a graph node; Mr X's last-known location holds it
# until the first reveal round.
HIDDEN_LOCATION = 0

# Round counter value before Mr X has made his first move.
NOT_STARTED = 0


class Colour(str, Enum):
    """Player colour enumeration. BLACK is always Mr X."""
    BLACK = "black"
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    WHITE = "white"
    YELLOW = "yellow"

    @property
    def is_mr_x(self) -> bool:
        return self is Colour.BLACK

    @property
    def is_detective(self) -> bool:
        return self is not Colour.BLACK


class Transport(str, Enum):
    """Edge label on the transport graph"""
    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    FERRY = "ferry"


class Ticket(str, Enum):
    """Ticket enumeration"""
    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    DOUBLE = "double"
    SECRET = "secret"

    @classmethod
    def from_transport(cls, transport: Transport) -> "Ticket":
        """Ticket needed to ride ``transport``; ferries take a secret ticket."""
        if transport is Transport.FERRY:
            return cls.SECRET
        return cls(transport.value)


class PassMove(BaseModel):
    """No-op move, only ever legal for a detective with no real options."""
    kind: Literal["pass"] = "pass"
    colour: Colour

    class Config:
        frozen = True

    def __str__(self) -> str:
        return f"Pass[{self.colour.name}]"


class TicketMove(BaseModel):
    """Single move spending ``ticket`` to reach ``destination``."""
    kind: Literal["ticket"] = "ticket"
    colour: Colour
    ticket: Ticket
    destination: int

    class Config:
        frozen = True

    def __str__(self) -> str:
        return f"Ticket[{self.colour.name}({self.ticket.name})->{self.destination}]"


class DoubleMove(BaseModel):
    """Two ticket moves made by Mr X within one turn.

    Both legs carry the double's colour; the double ticket itself is spent
    in addition to the two leg tickets.
    """
    kind: Literal["double"] = "double"
    colour: Colour
    first_move: TicketMove = Field(alias="firstMove")
    second_move: TicketMove = Field(alias="secondMove")

    class Config:
        frozen = True
        populate_by_name = True

    @model_validator(mode="after")
    def _legs_share_colour(self) -> "DoubleMove":
        if self.first_move.colour != self.colour or self.second_move.colour != self.colour:
            raise ValueError("both legs of a double move must belong to the same player")
        return self

    @classmethod
    def of(
        cls,
        colour: Colour,
        first_ticket: Ticket,
        first_destination: int,
        second_ticket: Ticket,
        second_destination: int,
    ) -> "DoubleMove":
        return cls(
            colour=colour,
            first_move=TicketMove(
                colour=colour, ticket=first_ticket, destination=first_destination
            ),
            second_move=TicketMove(
                colour=colour, ticket=second_ticket, destination=second_destination
            ),
        )

    @property
    def final_destination(self) -> int:
        return self.second_move.destination

    def __str__(self) -> str:
        return f"Double[{self.first_move}, {self.second_move}]"


Move = Annotated[Union[PassMove, TicketMove, DoubleMove], Field(discriminator="kind")]


class PlayerConfiguration(BaseModel):
    """Starting configuration for one player.

    ``player`` is the decision-making actor (see :class:`scotlandyard.players.Player`);
    it may be omitted when the host submits moves itself through ``accept``.
    """
    colour: Colour
    location: int
    tickets: Dict[Ticket, int]
    player: Optional[Any] = None

    class Config:
        arbitrary_types_allowed = True


class AIConfig(BaseModel):
    """AI player configuration"""
    rng_seed: Optional[int] = Field(None, alias="rngSeed")
    think_time: Optional[int] = Field(None, ge=0, alias="thinkTime")

    class Config:
        populate_by_name = True
