from parliament import Context


def main(context: Context):
    """Function template.

    The context parameter carries the received CloudEvent in
    ``context.cloud_event``.
    """
    event = context.cloud_event
    return event.data, 200
