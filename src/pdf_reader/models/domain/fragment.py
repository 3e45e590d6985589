"""Text fragment domain model."""

from typing import Tuple

from pydantic import BaseModel, Field

type Transform = tuple[float, float, float, float, float, float]


class TextFragment(BaseModel):
    """One positioned run of text as reported by the document engine.

    Attributes:
        text: The text of the run
        transform: Affine transform [a, b, c, d, e, f] placing the run on the page;
            a is the horizontal scale (font size), e and f the translation
    """

    text: str = Field(..., description="Text of the run")
    transform: Transform = Field(
        (1.0, 0.0, 0.0, 1.0, 0.0, 0.0), description="Affine transform [a, b, c, d, e, f]"
    )

    @property
    def font_size(self) -> float:
        """Font size, taken from the horizontal scale component."""
        return self.transform[0]

    @property
    def position(self) -> Tuple[float, float]:
        """Translation (x, y) of the run."""
        return (self.transform[4], self.transform[5])
