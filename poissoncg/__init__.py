"""Finite-difference Poisson solver with CG and Gauss-Seidel preconditioned CG."""

__version__ = "0.1.0"

__all__ = ["grid", "kinds", "pde", "perf", "solver", "timer"]