from dependency_injector import containers, providers
from ferreteria.v1_0.v1_containers import APIContainer
from ferreteria.storage.database import async_session

class ApplicationContainer(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
                "ferreteria.v1_0.routers.auth_router",
                "ferreteria.v1_0.routers.customer_router",
                "ferreteria.v1_0.routers.history_router",
            ]
    )
    db_session = providers.Object(async_session)

    api_container = providers.Container(
        APIContainer
    )
