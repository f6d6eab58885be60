"""
Linear-algebra backends.

Available backends:
    CPULinalgBackend: CPU reference implementation (float64, NumPy arrays)
"""

from pylinalg.linalg.backends.cpu import CPULinalgBackend

__all__ = [
    "CPULinalgBackend",
]
