"""
Where PROCLUS tensors live.

Relations are stored as float64, so the choice is between the CPU (the
default) and a CUDA device. Apple MPS has no float64 support and is not
offered.
"""

from typing import Optional, Union
import torch
import warnings


def get_default_device() -> torch.device:
    """First CUDA device when present, otherwise the CPU."""
    return torch.device('cuda') if torch.cuda.is_available() else torch.device('cpu')


def parse_device(device: Optional[Union[str, torch.device]] = None) -> torch.device:
    """Resolve the ``device`` argument of the estimators.

    None and 'cpu' give the CPU, 'auto' defers to get_default_device(), and
    'cuda' or 'cuda:<index>' select a GPU. Asking for CUDA on a machine
    without it warns and keeps the run on the CPU.

    Raises:
        ValueError: For any other device name
        TypeError: If device is neither a string nor a torch.device
    """
    if isinstance(device, torch.device):
        return device
    if device is None or device == 'cpu':
        return torch.device('cpu')
    if not isinstance(device, str):
        raise TypeError(f"Device must be str or torch.device, got {type(device)}")

    if device == 'auto':
        return get_default_device()
    if device.startswith('cuda'):
        if torch.cuda.is_available():
            return torch.device(device)
        warnings.warn(f"Requested device '{device}' but CUDA is not available; using CPU")
        return torch.device('cpu')
    raise ValueError(f"Unknown device: {device}")
