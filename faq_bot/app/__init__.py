# Nombre de archivo: __init__.py
# Ubicación de archivo: faq_bot/app/__init__.py
# Descripción: Inicializa el paquete de la aplicación (webhook, matcher, fuentes externas)
