"""Data Alchemist - data preparation and rule recommendation for resource allocation.

Import from submodules directly:
    from dataalchemist.models import Client, Worker, Task, BusinessRule
    from dataalchemist.validation import validate
    from dataalchemist.analysis import mine_recommendations
    from dataalchemist.workspace import Workspace
"""

__version__ = "0.1.0"
