from nodes import Button, Column, Padding, Text
from runtime import current_composer
from strings import string_resource


def onboarding_screen(on_continue_clicked):
    continue_key = current_composer().current_path + ("continue",)
    button = Column(
        (Button(continue_key, string_resource("continue"), on_continue_clicked),),
        padding=Padding.symmetric(vertical=1),
    )
    return Column(
        (Text(string_resource("welcome")), button),
        center=True,
        fill=True,
    )
