from dependency_injector import containers, providers
from ferreteria.core.security.session import session_manager
from ferreteria.v1_0.clients import HistoryClient
from ferreteria.v1_0.repositories import CustomerRepository
from ferreteria.v1_0.services import AuthService, CustomerService, HistoryService

class APIContainer(containers.DeclarativeContainer):
    session_manager = providers.Object(session_manager)
    customer_repository = providers.Singleton(CustomerRepository)
    history_client = providers.Singleton(HistoryClient)

    customer_service = providers.Singleton(
        CustomerService,
        customer_repository = customer_repository
    )
    history_service = providers.Singleton(
        HistoryService,
        history_client = history_client
    )
    auth_service = providers.Singleton(
        AuthService,
        session_manager = session_manager
    )
