import asyncio

from ludoteca.library.notifications import Notifier
from ludoteca.library.state import LibraryViewModel, NotificationDismissed
from ludoteca.schemas.library import NotificationType


async def test_notification_dismisses_itself():
    view_model = LibraryViewModel()
    notifier = Notifier(view_model.dispatch, delay=0.01)

    notifier.success("Salvo!")
    assert view_model.state.notification.message == "Salvo!"
    assert view_model.state.notification.type is NotificationType.SUCCESS

    await asyncio.sleep(0.05)
    assert view_model.state.notification is None


async def test_new_notification_replaces_current():
    view_model = LibraryViewModel()
    notifier = Notifier(view_model.dispatch, delay=10)

    first = notifier.success("primeiro")
    notifier.error("segundo")
    view_model.dispatch(NotificationDismissed(first.token))

    current = view_model.state.notification
    assert current.message == "segundo"
    assert current.type is NotificationType.ERROR
    notifier.cancel()
