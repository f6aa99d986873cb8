# API pública del dominio catalogos

from .modelos import Panel, Inversor

from .catalogos import (
    PANELES_RESPALDO,
    INVERSORES_RESPALDO,
    FuenteCatalogo,
    CatalogoEnMemoria,
    CatalogoYAML,
    CatalogoLeido,
    leer_catalogo,
)

__all__ = [
    # modelos
    "Panel",
    "Inversor",

    # fuentes
    "FuenteCatalogo",
    "CatalogoEnMemoria",
    "CatalogoYAML",

    # lectura tolerante
    "CatalogoLeido",
    "leer_catalogo",
    "PANELES_RESPALDO",
    "INVERSORES_RESPALDO",
]
