# giem/ui/menu.py
# Bottom navigation of the main app; "scan" opens the capture dialog instead of a tab.
TABS = [
    {"key": "dashboard", "label": "Início",    "icon": "🏠"},
    {"key": "history",   "label": "Histórico", "icon": "🕘"},
    {"key": "scan",      "label": "",          "icon": "📷"},
    {"key": "search",    "label": "Busca",     "icon": "🔍"},
    {"key": "profile",   "label": "Perfil",    "icon": "👤"},
]

DEFAULT_TAB = "dashboard"

# Sidebar of the scanner prototype
PROTOTYPE_MENU = [
    {"label": "Scanner",               "icon": "📸"},
    {"label": "Registros",             "icon": "🗂️"},
    {"label": "Configuração Supabase", "icon": "🛠️"},
    {"label": "Perfil",                "icon": "👤"},
]
