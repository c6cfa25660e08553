"""
Erreurs fatales de la sonde d'inventaire

Toute exception dérivée de ProbeError interrompt l'exécution et se traduit
par un code de sortie 1. Les échecs de lecture d'un fichier de configuration
individuel ne passent pas par ces classes : ils sont journalisés puis ignorés.
"""

from typing import Optional, Sequence


class ProbeError(Exception):
    """Erreur de base de la sonde"""
    pass


class DescriptorReadError(ProbeError):
    """Le fichier descripteur de distribution est absent ou illisible"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Impossible de lire {path}: {reason}")


class PackageQueryError(ProbeError):
    """La commande de requête des paquets est introuvable ou a échoué"""

    def __init__(self, command: Sequence[str], reason: str, returncode: Optional[int] = None):
        self.command = list(command)
        self.reason = reason
        self.returncode = returncode
        message = f"Échec de la requête des paquets ({self.command[0]}): {reason}"
        if returncode is not None:
            message += f" (code: {returncode})"
        super().__init__(message)


class SerializationError(ProbeError):
    """Le snapshot n'a pas pu être converti en JSON"""
    pass
