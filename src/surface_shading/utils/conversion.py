"""Type conversion utilities."""

from __future__ import annotations
from typing import Union
import numpy as np


def to_torch_tensor(
    x: Union[np.ndarray, "torch.Tensor", list],
    device: str = "cpu",
    dtype: "torch.dtype" = None
):
    """
    Convert input to PyTorch tensor.

    Args:
        x: Input (numpy array, torch tensor, or list)
        device: Target device
        dtype: Target dtype (default: torch.float32)

    Returns:
        PyTorch tensor on specified device
    """
    import torch

    if dtype is None:
        dtype = torch.float32

    if isinstance(x, torch.Tensor):
        tensor = x.to(dtype)
    else:
        tensor = torch.as_tensor(np.asarray(x), dtype=dtype)

    if device and tensor.device != torch.device(device):
        tensor = tensor.to(device)

    return tensor


def to_numpy_array(
    x: Union[np.ndarray, "torch.Tensor", list, tuple],
    dtype: np.dtype = np.float32
) -> np.ndarray:
    """
    Convert input to NumPy array.

    Args:
        x: Input (numpy array, torch tensor, or sequence)
        dtype: Target dtype

    Returns:
        NumPy array
    """
    if hasattr(x, 'detach'):  # torch.Tensor
        return x.detach().cpu().numpy().astype(dtype)
    else:
        return np.asarray(x, dtype=dtype)


def as_vector_rows(x, width: int = 3) -> np.ndarray:
    """
    Promote a single vector or a batch of vectors to (N, width) float32.

    Args:
        x: (width,) or (N, width) input
        width: Number of components per row

    Returns:
        (N, width) float32 array

    Raises:
        ValueError: If the trailing dimension does not match width
    """
    arr = to_numpy_array(x)

    if arr.ndim == 1:
        arr = arr.reshape(1, -1)

    if arr.ndim != 2 or arr.shape[1] != width:
        raise ValueError(f"Expected ({width},) or (N, {width}), got {arr.shape}")

    return arr


def normalize_to_float32(img: np.ndarray) -> np.ndarray:
    """
    Convert color samples to float32.

    Float input keeps its values, including HDR colors above 1; integer
    texels are scaled by their dtype range into [0, 1].

    Args:
        img: Input samples (any dtype)

    Returns:
        float32 samples
    """
    if hasattr(img, 'detach'):  # torch.Tensor
        img = img.detach().cpu().numpy()
    img = np.asarray(img)

    if np.issubdtype(img.dtype, np.floating):
        return img.astype(np.float32)

    if img.dtype == np.uint8:
        scale = 255.0
    elif img.dtype == np.uint16:
        scale = 65535.0
    else:
        scale = float(np.iinfo(img.dtype).max) if np.issubdtype(img.dtype, np.integer) else 1.0

    img_float = img.astype(np.float32) / scale
    return np.clip(img_float, 0.0, 1.0)
