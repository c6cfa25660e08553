"""
Identification de la distribution Linux

Lit le descripteur os-release (format KEY="VALUE", une entrée par ligne)
et construit l'identité de distribution utilisée pour choisir le
gestionnaire de paquets.
"""

from typing import Optional

from .base import BaseCollector, TextReader, read_text_file
from ..core.config import DEFAULT_OS_RELEASE_PATH
from ..core.errors import DescriptorReadError
from ..core.models import DistributionIdentity

QUOTE_CHARS = '"\''


def parse_os_release(content: str) -> DistributionIdentity:
    """
    Parse le contenu d'un fichier os-release

    Chaque ligne non vide est coupée sur le premier '='. Les guillemets
    entourant la clé et la valeur sont retirés. Les lignes sans '=' et
    les commentaires sont ignorés.

    Args:
        content: Contenu texte du descripteur

    Returns:
        DistributionIdentity: Identité de la distribution
    """
    fields = {}

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue

        key, value = line.split('=', 1)
        fields[key.strip(QUOTE_CHARS)] = value.strip(QUOTE_CHARS)

    return DistributionIdentity(fields)


class DistributionCollector(BaseCollector):
    """
    Collecteur de l'identité de distribution

    L'échec de lecture du descripteur est fatal : sans identité,
    aucun gestionnaire de paquets ne peut être choisi.
    """

    def __init__(self, config, logger, descriptor_reader: Optional[TextReader] = None):
        """
        Args:
            config: Instance de ProbeConfig
            logger: Instance de logging.Logger
            descriptor_reader: Fonction de lecture du descripteur (lecture fichier par défaut)
        """
        super().__init__(config, logger)
        self.descriptor_reader = descriptor_reader or read_text_file

        if config is not None:
            self.descriptor_path = config.get_probe_config()['os_release_path']
        else:
            self.descriptor_path = DEFAULT_OS_RELEASE_PATH

    def collect(self) -> DistributionIdentity:
        """
        Lit et parse le descripteur de distribution

        Returns:
            DistributionIdentity: Identité de la distribution

        Raises:
            DescriptorReadError: Descripteur absent ou illisible
        """
        self._start_collection()

        try:
            content = self.descriptor_reader(self.descriptor_path)
        except OSError as e:
            raise DescriptorReadError(self.descriptor_path, str(e)) from e

        identity = parse_os_release(content)
        self.logger.info(f"Distribution détectée: {identity.os_id or 'inconnue'} "
                         f"({identity.get('VERSION_ID', 'version inconnue')})")

        self.last_collection_duration = self._end_collection()
        return identity
