# -*- coding: utf-8 -*-
"""
Pixel Map - Immutable indexed view of a gray-level image.

Wraps an integer intensity grid for component tree construction. Every
pixel receives a stable integer identity (``index = y * width + x``),
and the map knows how to enumerate the in-bounds neighbors of a pixel
under 4- or 8-connectivity. An optional validity mask removes pixels
from the image entirely (no-data regions).

The map also fixes the *polarity* of the tree to be built. Builders only
ever process non-negative *processing keys* in ascending order; the map
translates between keys and original intensities:

- dark polarity: ``key = value``
- bright polarity: ``key = max_value - value``

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union

# Third-party
import numpy as np
from scipy.ndimage import generate_binary_structure

# COMPTREE internal
from comptree.exceptions import EmptyInputError, ValidationError
from comptree.vocabulary import Connectivity, Polarity


# Freeman order, y axis pointing down: E, N, W, S (+ diagonals for 8)
NEIGHBOR_OFFSETS = {
    Connectivity.FOUR: ((1, 0), (0, -1), (-1, 0), (0, 1)),
    Connectivity.EIGHT: (
        (1, 0), (1, -1), (0, -1), (-1, -1),
        (-1, 0), (-1, 1), (0, 1), (1, 1),
    ),
}


class Pixel(NamedTuple):
    """A single image pixel with its coordinates and intensity."""

    x: int
    y: int
    value: int


def _as_connectivity(connectivity: Union[int, Connectivity]) -> Connectivity:
    if isinstance(connectivity, Connectivity):
        return connectivity
    if isinstance(connectivity, bool):
        raise ValidationError(
            f"connectivity must be 4 or 8, got {connectivity!r}"
        )
    try:
        return Connectivity(connectivity)
    except ValueError:
        raise ValidationError(
            f"connectivity must be 4 or 8, got {connectivity!r}"
        ) from None


def _as_polarity(polarity: Union[str, Polarity]) -> Polarity:
    if isinstance(polarity, Polarity):
        return polarity
    try:
        return Polarity(polarity)
    except ValueError:
        raise ValidationError(
            f"polarity must be 'dark' or 'bright', got {polarity!r}"
        ) from None


class PixelMap:
    """Immutable pixel arena with neighbor lookup.

    Parameters
    ----------
    grid : array_like
        Non-negative integer intensities, either 2D with shape
        ``(height, width)`` or flat with ``width * height`` elements in
        row-major order.
    connectivity : int or Connectivity
        ``4`` (axis neighbors) or ``8`` (axis and diagonal neighbors).
        Default 4.
    polarity : str or Polarity
        ``'dark'`` builds components of pixels ``<= level`` (min-tree),
        ``'bright'`` of pixels ``>= level`` (max-tree). Default ``'dark'``.
    mask : array_like of bool, optional
        Validity mask with the grid's 2D shape. ``False`` pixels are
        excluded from every component.
    width, height : int, optional
        Required for a flat *grid*; checked against a 2D *grid*.

    Raises
    ------
    ValidationError
        For non-positive dimensions, size mismatch, a grid that is not
        1D/2D, a non-integer dtype, negative intensities, an unsupported
        connectivity or polarity, or a mask of the wrong shape.
    EmptyInputError
        If the grid has zero pixels.
    """

    def __init__(
        self,
        grid: np.ndarray,
        connectivity: Union[int, Connectivity] = 4,
        polarity: Union[str, Polarity] = 'dark',
        mask: Optional[np.ndarray] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        self._connectivity = _as_connectivity(connectivity)
        self._polarity = _as_polarity(polarity)

        image = self._coerce_grid(grid, width, height)
        self._height, self._width = image.shape

        if mask is None:
            valid = np.ones(image.size, dtype=bool)
        else:
            mask = np.asarray(mask, dtype=bool)
            if mask.shape != image.shape:
                raise ValidationError(
                    f"mask shape {mask.shape} does not match grid shape "
                    f"{image.shape}"
                )
            valid = mask.ravel().copy()

        values = image.ravel().astype(np.int64)
        self._max_value = int(values[valid].max()) if valid.any() else 0
        if self._polarity is Polarity.DARK:
            keys = values.copy()
        else:
            keys = self._max_value - values
        keys[~valid] = 0

        for arr in (values, keys, valid):
            arr.setflags(write=False)
        self._values = values
        self._keys = keys
        self._valid = valid
        self._offsets = NEIGHBOR_OFFSETS[self._connectivity]

        # Plain lists for fast scalar access in builder loops
        self._value_list: List[int] = values.tolist()
        self._valid_list: List[bool] = valid.tolist()

    @staticmethod
    def _coerce_grid(
        grid: np.ndarray,
        width: Optional[int],
        height: Optional[int],
    ) -> np.ndarray:
        for name, dim in (('width', width), ('height', height)):
            if dim is not None and (
                isinstance(dim, bool) or not isinstance(dim, (int, np.integer))
                or dim <= 0
            ):
                raise ValidationError(
                    f"{name} must be a positive integer, got {dim!r}"
                )

        image = np.asarray(grid)
        if image.ndim == 1:
            if width is None or height is None:
                raise ValidationError(
                    "width and height are required for a flat grid"
                )
            if image.size != width * height:
                raise ValidationError(
                    f"grid has {image.size} values, expected "
                    f"width * height = {width * height}"
                )
            image = image.reshape(height, width)
        elif image.ndim == 2:
            rows, cols = image.shape
            if (width is not None and width != cols) or (
                height is not None and height != rows
            ):
                raise ValidationError(
                    f"grid shape {image.shape} does not match "
                    f"width={width}, height={height}"
                )
        else:
            raise ValidationError(
                f"Expected 2D grid, got shape {image.shape}"
            )

        if image.size == 0:
            raise EmptyInputError(
                f"grid has no pixels (shape {image.shape})"
            )
        if image.dtype == bool:
            image = image.astype(np.int64)
        if not np.issubdtype(image.dtype, np.integer):
            raise ValidationError(
                f"grid must have an integer dtype, got {image.dtype}"
            )
        if image.min() < 0:
            raise ValidationError(
                f"grid intensities must be non-negative, got minimum "
                f"{int(image.min())}"
            )
        return image

    # -----------------------------------------------------------------
    # Geometry
    # -----------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid shape ``(height, width)``."""
        return (self._height, self._width)

    @property
    def size(self) -> int:
        """Total number of grid pixels, masked ones included."""
        return self._width * self._height

    @property
    def n_valid(self) -> int:
        """Number of pixels that take part in components."""
        return int(np.count_nonzero(self._valid))

    @property
    def connectivity(self) -> Connectivity:
        return self._connectivity

    @property
    def polarity(self) -> Polarity:
        return self._polarity

    @property
    def structure(self) -> np.ndarray:
        """SciPy binary structuring element matching the connectivity."""
        rank = 1 if self._connectivity is Connectivity.FOUR else 2
        return generate_binary_structure(2, rank)

    def index(self, x: int, y: int) -> int:
        """Pixel id at column *x*, row *y*."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.shape} grid")
        return y * self._width + x

    def coords(self, pixel_id: int) -> Tuple[int, int]:
        """``(x, y)`` of *pixel_id*."""
        self._check_id(pixel_id)
        return (pixel_id % self._width, pixel_id // self._width)

    def _check_id(self, pixel_id: int) -> None:
        if not (0 <= pixel_id < self.size):
            raise IndexError(
                f"pixel id {pixel_id} outside [0, {self.size})"
            )

    # -----------------------------------------------------------------
    # Intensities
    # -----------------------------------------------------------------
    @property
    def values(self) -> np.ndarray:
        """Flat read-only intensity array (row-major)."""
        return self._values

    @property
    def keys(self) -> np.ndarray:
        """Flat read-only processing keys (0 for masked pixels)."""
        return self._keys

    @property
    def valid(self) -> np.ndarray:
        """Flat read-only validity mask."""
        return self._valid

    @property
    def max_value(self) -> int:
        """Largest intensity among valid pixels."""
        return self._max_value

    def intensity(self, pixel_id: int) -> int:
        """Intensity of *pixel_id*."""
        return self._value_list[pixel_id]

    def is_valid(self, pixel_id: int) -> bool:
        return self._valid_list[pixel_id]

    def level_of_key(self, key: int) -> int:
        """Original intensity corresponding to processing *key*."""
        if self._polarity is Polarity.DARK:
            return int(key)
        return self._max_value - int(key)

    def key_of_level(self, level: int) -> int:
        """Processing key corresponding to intensity *level*."""
        if self._polarity is Polarity.DARK:
            return int(level)
        return self._max_value - int(level)

    # -----------------------------------------------------------------
    # Pixels and neighbors
    # -----------------------------------------------------------------
    def pixel(self, pixel_id: int) -> Pixel:
        x, y = self.coords(pixel_id)
        return Pixel(x, y, self._value_list[pixel_id])

    def pixel_at(self, x: int, y: int) -> Pixel:
        return Pixel(x, y, self._value_list[self.index(x, y)])

    def pixel_vector(self) -> List[Pixel]:
        """All pixels in row-major order, masked ones included."""
        w = self._width
        return [
            Pixel(i % w, i // w, v) for i, v in enumerate(self._value_list)
        ]

    def pixel_ids(self) -> np.ndarray:
        """Ids of the valid pixels in ascending order."""
        return np.flatnonzero(self._valid)

    def neighbors(self, pixel_id: int) -> Iterator[int]:
        """Yield the valid in-bounds neighbors of *pixel_id*.

        Each call returns a fresh generator, so the sequence can be
        restarted at will.

        Raises
        ------
        IndexError
            If *pixel_id* is outside the grid.
        """
        self._check_id(pixel_id)
        return self._iter_neighbors(pixel_id)

    def _iter_neighbors(self, pixel_id: int) -> Iterator[int]:
        w, h = self._width, self._height
        valid = self._valid_list
        x, y = pixel_id % w, pixel_id // w
        for dx, dy in self._offsets:
            u, v = x + dx, y + dy
            if 0 <= u < w and 0 <= v < h:
                q = v * w + u
                if valid[q]:
                    yield q

    def to_image(self, flat: np.ndarray) -> np.ndarray:
        """Reshape a flat per-pixel array to ``(height, width)``."""
        return np.asarray(flat).reshape(self._height, self._width)

    def __repr__(self) -> str:
        return (
            f"PixelMap(width={self._width}, height={self._height}, "
            f"connectivity={self._connectivity.value}, "
            f"polarity={self._polarity.value!r})"
        )
