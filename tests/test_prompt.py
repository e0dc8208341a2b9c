"""
Tests pour le fournisseur d'interaction console.
"""

from caption_translator.resolution import Choice, ConsolePrompt


def scripted_input(*answers):
    """Fonction input() rejouant des réponses ; une exception est levée telle quelle."""
    queue = list(answers)

    def _input(message):
        answer = queue.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    return _input


def make_prompt(*answers):
    output = []
    return ConsolePrompt(input_func=scripted_input(*answers), output_func=output.append), output


def test_choose_reads_first_letter():
    prompt, output = make_prompt("x", "Edit")

    assert prompt.choose("Rechnung", "Invoice") is Choice.EDIT
    assert "  Choix invalide." in output
    assert "  Proposé   : Rechnung" in output


def test_choose_eof_aborts():
    prompt, _ = make_prompt(EOFError())

    assert prompt.choose("Rechnung", "Invoice") is Choice.ABORT


def test_read_text_default():
    prompt, _ = make_prompt("   ")

    assert prompt.read_text("Nouvelle valeur", default="Rechnung") == "Rechnung"


def test_read_text_interrupt():
    prompt, _ = make_prompt(KeyboardInterrupt())

    assert prompt.read_text("Traduction") is None


def test_ask_yes_no_repeats_until_valid():
    prompt, _ = make_prompt("peut-être", "Oui")

    assert prompt.ask_yes_no("Valider ?") is True


def test_ask_yes_no_no():
    prompt, _ = make_prompt("n")

    assert prompt.ask_yes_no("Valider ?") is False
