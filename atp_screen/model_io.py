"""
Model discovery and loading
"""

import logging
import os
from typing import Iterable, List

import cobra
from cobra import Model

from .config import MODEL_EXTENSIONS

logger = logging.getLogger(__name__)


def list_model_files(folder: str, extensions: Iterable[str] = MODEL_EXTENSIONS) -> List[str]:
    """
    List the model files in a folder

    Parameters:
    -----------
    folder : str
        Folder holding COBRA model files
    extensions : Iterable[str]
        Accepted file extensions (case-insensitive)

    Returns:
    --------
    List[str]: sorted file names (not paths)
    """
    if not os.path.isdir(folder):
        raise FileNotFoundError(f"Model folder not found: '{folder}'")

    extensions = tuple(ext.lower() for ext in extensions)
    model_files = []
    for name in sorted(os.listdir(folder)):
        if not os.path.isfile(os.path.join(folder, name)):
            continue
        if name.lower().endswith(extensions):
            model_files.append(name)

    logger.info(f"  {len(model_files)} model files in {folder}")
    return model_files


def model_id_from_filename(name: str) -> str:
    """Strip the model file extension from a file name."""
    base = os.path.basename(name)
    for ext in MODEL_EXTENSIONS:
        if base.lower().endswith(ext):
            return base[:-len(ext)]
    return base


def load_model(filepath: str) -> Model:
    """Load a COBRA model from .mat, .xml/.sbml or .json"""
    lower = filepath.lower()
    if lower.endswith('.mat'):
        return cobra.io.load_matlab_model(filepath)
    elif lower.endswith('.xml') or lower.endswith('.sbml'):
        return cobra.io.read_sbml_model(filepath)
    elif lower.endswith('.json'):
        return cobra.io.load_json_model(filepath)
    else:
        raise ValueError(f"Unsupported model format: {filepath}")
