from ..infrastructure.app_factory import create_application
from ..infrastructure.config.settings import get_settings
from ..interfaces.api import router as api_router

settings = get_settings()

app = create_application(
    router=api_router,
    settings=settings,
    summary="REST API for a small lending library",
    description="""
    # Library Management API

    This API keeps track of a library's users, its books and who borrowed what:

    * 👤 **Users**: Register, rename and remove library users
    * 📚 **Books**: Maintain the catalogue and the number of copies of each title
    * 🔄 **Borrowing**: Lend a copy to a user and take it back

    ## Rules

    - User first and last name pairs are unique, and so are book titles
    - A book can only be borrowed while copies remain
    - A user holds at most one copy of the same book at a time
    """,
)
