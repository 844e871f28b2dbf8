# =============================================================================
# CONFTEST - Root
# =============================================================================
# Coloca a raiz do repositorio no sys.path para os testes importarem exam/, config, server
# =============================================================================

import sys
from pathlib import Path

# Raiz do repositorio
sys.path.insert(0, str(Path(__file__).parent))
