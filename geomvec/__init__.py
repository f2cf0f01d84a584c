from geomvec.base import DEFAULT_DIM, SUPPORTED_DIMENSIONS, GeometryVector, Kind, Primitive, concat, is_geometry
from geomvec.construct import (
    ArgumentSet,
    ConstructorTable,
    Signature,
    classify_arguments,
    construct,
    validate_constructor_input,
)
from geomvec.curve import (
    Circle,
    CircleCollection,
    Sphere,
    SphereCollection,
    as_circle,
    as_sphere,
    circle,
    is_circle,
    is_sphere,
    sphere,
)
from geomvec.exceptions import (
    ConversionUnsupported,
    DegenerateConstruction,
    DimensionMismatch,
    GeometryException,
    LengthMismatch,
    UnsupportedCombination,
)
from geomvec.kernel import DEFAULT_KERNEL, Kernel, RationalKernel
from geomvec.number import ExactNumber, ExactNumberCollection, as_exact_numeric, exact_numeric, is_exact_numeric
from geomvec.point import (
    Plane,
    PlaneCollection,
    Point,
    PointCollection,
    Vec,
    VecCollection,
    as_plane,
    as_point,
    as_vec,
    is_plane,
    is_point,
    is_vec,
    plane,
    point,
    vec,
)
from geomvec.version import __version__
