"""
Sérialisation JSON du snapshot d'inventaire
"""

import json
import os

from .errors import SerializationError
from .models import SystemSnapshot


def render_snapshot(snapshot: SystemSnapshot, indent: int = 2) -> str:
    """
    Convertit le snapshot en document JSON

    Args:
        snapshot: Snapshot à sérialiser
        indent: Indentation du JSON

    Returns:
        str: Document JSON (caractères non ASCII conservés)

    Raises:
        SerializationError: Le snapshot contient une valeur non sérialisable
    """
    try:
        return json.dumps(snapshot.to_dict(), indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Erreur de sérialisation du snapshot: {e}") from e


def write_snapshot(document: str, output_file: str):
    """
    Écrit le document JSON dans un fichier

    Crée le dossier parent si nécessaire.
    """
    output_dir = os.path.dirname(output_file)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir, exist_ok=True)

    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(document)
        f.write('\n')
