"""
Built-in sample pipeline served until a webhook is loaded.
Rows use the source system's column names, exactly as the webhook sends them.
"""
from typing import List

from models.deal_models import Deal

SAMPLE_RECORDS = [
    {
        "Fecha de Contacto": "2025-11-19",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Luz Karime",
        "Nombre de Trato": "Mabel",
        "Estado": "Contacto",
        "Programa Académico": "PROGRAMA DE MAQUILLAJE",
        "Fecha de Cierre": None,
    },
    {
        "Fecha de Contacto": "2025-11-19",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Wendy Johana Pastrana Deulofrent",
        "Nombre de Trato": "Lina RosaFigueroa",
        "Estado": "Contacto",
        "Programa Académico": "PROGRAMA DE MAQUILLAJE",
        "Fecha de Cierre": None,
    },
    {
        "Fecha de Contacto": "2024-10-11",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Claudia Patricia Beltrán Orozco",
        "Nombre de Trato": "NoralbaCamacho",
        "Estado": "Contacto",
        "Programa Académico": "COSMETOLOGÍA",
        "Fecha de Cierre": None,
    },
    {
        "Fecha de Contacto": "2024-06-11",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Lidia Sajonero Garcia",
        "Nombre de Trato": "Sheila C. Godoy Martinez",
        "Estado": "Contacto",
        "Programa Académico": "DIPLOMADO MEDICINA ESTÉTICA",
        "Fecha de Cierre": None,
    },
    {
        "Fecha de Contacto": "2025-04-27",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Lidia Sajonero Garcia",
        "Nombre de Trato": "Mauricio Mauricio Gonzalez",
        "Estado": "Contacto",
        "Programa Académico": "DIPLOMADO MEDICINA ESTÉTICA",
        "Fecha de Cierre": None,
    },
    {
        "Fecha de Contacto": "2025-11-19",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Luz Karime",
        "Nombre de Trato": "JohannaMorales",
        "Estado": "Contacto",
        "Programa Académico": "PROGRAMA DE MAQUILLAJE",
        "Fecha de Cierre": None,
    },
    {
        "Fecha de Contacto": "2025-11-19",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Luz Karime",
        "Nombre de Trato": "DorisMelgarejo",
        "Estado": "Contacto",
        "Programa Académico": "PROGRAMA DE MAQUILLAJE",
        "Fecha de Cierre": None,
    },
    {
        "Fecha de Contacto": "2025-03-08",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Lidia Sajonero Garcia",
        "Nombre de Trato": "Lucy Cossio Lucy Cossio Serna",
        "Estado": "Cerrado Ganado",
        "Programa Académico": "DIPLOMADO MEDICINA ESTÉTICA",
        "Fecha de Cierre": "2025-11-20",
    },
    {
        "Fecha de Contacto": "2025-11-18",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Laine Karina Nova Vargas",
        "Nombre de Trato": "MaríaRosso González",
        "Estado": "Cerrado Perdido",
        "Programa Académico": "COSMETOLOGÍA",
        "Fecha de Cierre": "2025-11-21",
    },
    {
        "Fecha de Contacto": "2024-11-22",
        "Fecha de Trato": "2025-11-19",
        "Asesora Comercial": "Lidia Sajonero Garcia",
        "Nombre de Trato": "Sara Patiño",
        "Estado": "Contacto",
        "Programa Académico": "DIPLOMADO MEDICINA ESTÉTICA",
        "Fecha de Cierre": None,
    },
]


def sample_deals() -> List[Deal]:
    """Fresh Deal list built from SAMPLE_RECORDS."""
    return [Deal.model_validate(row) for row in SAMPLE_RECORDS]
