from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sized
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic

import numpy as np
import numpy.typing as npt
from typing_extensions import Self, TypeVar, overload, override

from geomvec.exceptions import DimensionMismatch, LengthMismatch
from geomvec.utils import normalize_index

if TYPE_CHECKING:
    from geomvec.construct import ConstructorTable
    from geomvec.utils.typing import VectorIndex

SUPPORTED_DIMENSIONS = (2, 3)
DEFAULT_DIM = 2


class Kind(Enum):
    """The geometric kinds known to the constructors."""

    NUMBER = "exact_numeric"
    POINT = "point"
    VEC = "vec"
    PLANE = "plane"
    SPHERE = "sphere"
    CIRCLE = "circle"

    @property
    def plural(self) -> str:
        return "exact numerics" if self is Kind.NUMBER else f"{self.value}s"


class Primitive(ABC):
    """Base class for all exact geometric primitives.

    A primitive has a fixed kind and dimension and is immutable. Primitives compare by value and are hashable.

    """

    kind: ClassVar[Kind]

    @property
    @abstractmethod
    def dim(self) -> int | None:
        """The ambient dimension of the primitive, None for dimensionless primitives."""

    @abstractmethod
    def _key(self) -> tuple:
        pass

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Primitive):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    @override
    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_frozen"):
            raise AttributeError(f"{type(self).__name__} objects are immutable")
        super().__setattr__(name, value)

    def _freeze(self) -> None:
        object.__setattr__(self, "_frozen", True)


def validate_dimension(dim: int) -> int:
    if dim not in SUPPORTED_DIMENSIONS:
        raise ValueError(f"Only dimensions 2 and 3 are supported, got dimension {dim}")
    return dim


PrimitiveT = TypeVar("PrimitiveT", bound=Primitive, covariant=True, default=Primitive)


class GeometryVector(Generic[PrimitiveT], Sized, Iterable[PrimitiveT]):
    """An immutable vector of geometric primitives of one kind and one dimension.

    Each slot holds either a primitive or None, marking a missing value.

    Args:
        elements: The primitives (or None for missing values) in the vector.
        dim: The dimension of the vector. Required for vectors without any non-missing element of a dimensional kind,
            otherwise it is inferred from the elements.

    Attributes:
        array: The underlying read-only numpy array of dtype object.

    """

    _element_class: ClassVar[type[Primitive]] = Primitive
    _constructors: ClassVar[ConstructorTable | None] = None
    _dimensions: ClassVar[tuple[int, ...]] = SUPPORTED_DIMENSIONS

    array: npt.NDArray[np.object_]

    def __init__(self, elements: Iterable[PrimitiveT | None] = (), dim: int | None = None) -> None:
        elements = list(elements)
        element_name = self._element_class.__name__
        for e in elements:
            if e is not None and not isinstance(e, self._element_class):
                raise TypeError(
                    f"Elements of a {type(self).__name__} must be of type {element_name}, not {type(e).__name__}"
                )

        dims = {e.dim for e in elements if e is not None}
        if len(dims) > 1:
            raise DimensionMismatch(f"All elements must have the same dimension, got dimensions {sorted(dims)}")

        if self.kind is Kind.NUMBER:
            if dim is not None:
                raise ValueError("Exact numbers have no dimension")
        elif dims:
            (element_dim,) = dims
            if dim is not None and dim != element_dim:
                raise DimensionMismatch(f"Elements have dimension {element_dim}, but dimension {dim} was requested")
            dim = element_dim
        elif dim is None:
            dim = DEFAULT_DIM if DEFAULT_DIM in self._dimensions else self._dimensions[0]

        if dim is not None and dim not in self._dimensions:
            raise DimensionMismatch(
                f"{type(self).__name__} only supports dimensions {self._dimensions}, got dimension {dim}"
            )
        self._dim = dim
        self.array = np.empty(len(elements), dtype=object)
        self.array[:] = elements
        self.array.flags.writeable = False

    @classmethod
    def empty(cls, dim: int | None = None) -> Self:
        """Construct a vector of length 0.

        Args:
            dim: The dimension of the empty vector, ignored for dimensionless kinds. By default the default dimension
                supported by the kind.

        Returns:
            The empty vector.

        """
        return cls((), dim=None if cls._element_class.kind is Kind.NUMBER else dim)

    @classmethod
    def _from_array(cls, array: npt.NDArray[np.object_], dim: int | None) -> Self:
        result = cls.__new__(cls)
        result._dim = dim
        result.array = array
        result.array.flags.writeable = False
        return result

    @staticmethod
    def _get_collection_class(kind: Kind) -> type[GeometryVector]:
        def find_class(current_class: type[GeometryVector]) -> type[GeometryVector] | None:
            if current_class._element_class is not Primitive and current_class._element_class.kind is kind:
                return current_class
            for subclass in current_class.__subclasses__():
                if result_class := find_class(subclass):
                    return result_class
            return None

        result = find_class(GeometryVector)
        if result is None:
            raise TypeError(f"No GeometryVector found for kind {kind.value}")
        return result

    @property
    def kind(self) -> Kind:
        """The geometric kind of the elements."""
        return self._element_class.kind

    @property
    def dim(self) -> int | None:
        """The ambient dimension of the vector, None for dimensionless kinds."""
        return self._dim

    @property
    def is_missing(self) -> npt.NDArray[np.bool_]:
        """A boolean array marking the missing slots."""
        return np.fromiter((e is None for e in self.array), dtype=bool, count=len(self.array))

    def repeat_to(self, length: int) -> Self:
        """Broadcast a vector of length 1 to the given length.

        Args:
            length: The target length.

        Returns:
            A vector of the given length. Vectors that already have the given length are returned unchanged.

        Raises:
            LengthMismatch: If the vector has neither length 1 nor the given length.

        """
        if len(self) == length:
            return self
        if len(self) != 1:
            raise LengthMismatch(f"Cannot broadcast a vector of length {len(self)} to length {length}")
        return self._from_array(np.repeat(self.array, length), self._dim)

    def map(self, func: Any, *others: GeometryVector) -> list[Any]:
        """Apply a function element-wise to this and other vectors of the same length.

        Missing slots in any input give a missing result without calling the function.

        """
        results = []
        for elements in zip(self.array, *(o.array for o in others)):
            results.append(None if any(e is None for e in elements) else func(*elements))
        return results

    def copy(self) -> Self:
        return self._from_array(self.array, self._dim)

    def __copy__(self) -> Self:
        return self.copy()

    @overload
    def __getitem__(self, index: int | np.int_) -> PrimitiveT | None: ...

    @overload
    def __getitem__(self, index: VectorIndex) -> Self: ...

    def __getitem__(self, index: VectorIndex) -> PrimitiveT | None | Self:
        positions = normalize_index(index, len(self))
        if isinstance(positions, int):
            return self.array[positions]
        return self._from_array(self.array[positions], self._dim)

    def __setitem__(self, key: VectorIndex, value: object) -> None:
        raise TypeError(f"{type(self).__name__} objects are immutable")

    @override
    def __len__(self) -> int:
        return len(self.array)

    @override
    def __iter__(self) -> Iterator[PrimitiveT | None]:
        return iter(self.array.tolist())

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeometryVector):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.dim == other.dim
            and len(self) == len(other)
            and all(a == b for a, b in zip(self.array, other.array))
        )

    __hash__ = None  # type: ignore[assignment]

    @override
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.array.tolist()})"


def is_geometry(x: object) -> bool:
    """Tests whether an object is a vector of geometric primitives."""
    return isinstance(x, GeometryVector)


def concat(*vectors: GeometryVector) -> GeometryVector:
    """Concatenate vectors of the same kind and dimension.

    Args:
        *vectors: The vectors to concatenate, at least one.

    Returns:
        A new vector holding the elements of all vectors in order.

    Raises:
        DimensionMismatch: If the vectors have different dimensions.
        TypeError: If the vectors are of different kinds.

    """
    if len(vectors) == 0:
        raise TypeError("At least one argument is required.")
    first = vectors[0]
    for v in vectors[1:]:
        if v.kind is not first.kind:
            raise TypeError(f"Cannot combine {first.kind.plural} with {v.kind.plural}")
        if v.dim != first.dim:
            raise DimensionMismatch(f"Cannot combine vectors of dimension {first.dim} and {v.dim}")
    return first._from_array(np.concatenate([v.array for v in vectors]), first.dim)
