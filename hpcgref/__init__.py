"""Grid decomposition, problem generation, vector and sparse kernels and Gauss-Seidel smoothing for the 27-point 3D stencil problem."""

__version__ = "0.8.9"

__all__ = [
    "shape",
    "geometry",
    "problem",
    "vectors",
    "sparse",
    "smoother",
]