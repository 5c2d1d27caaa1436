"""Root RPC command table.

Collects the command tables declared by each module, the same way
``urls.py`` collects URL patterns in an HTTP project.
"""

from modules.core.rpc.dispatcher import include

commandpatterns = [
    *include("modules.core.commands"),
    *include("modules.products.commands"),
]
