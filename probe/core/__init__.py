"""
Module Core - Composants principaux de la sonde d'inventaire

Ce module contient les fonctionnalités de base de la sonde :
- Configuration
- Logging
- Modèle de données et erreurs
- Assemblage et sortie du snapshot
"""
