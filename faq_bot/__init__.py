# Nombre de archivo: __init__.py
# Ubicación de archivo: faq_bot/__init__.py
# Descripción: Paquete del bot de FAQ para LINE respaldado por Google Sheets

__version__ = "0.1.0"
