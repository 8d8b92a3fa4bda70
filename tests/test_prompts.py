from recipe_chef.chef_core import SystemPromptTemplate
from recipe_chef.chef_core.prompts import (
    ANONYMOUS_DESCRIPTION,
    CHEF_SYSTEM_PROMPT,
    find_recipe_prompt,
    ingredient_names_prompt,
)


def test_render_leaves_unset_slots():
    prompt = SystemPromptTemplate().render(chef_name="Andel")

    assert "Chef Andel" in prompt
    assert "[[CHEF_NAME]]" not in prompt
    assert "[[USER_DESCRIPTION]]" in prompt
    assert "[[user_name]]" in prompt


def test_render_always_starts_from_the_template():
    template = SystemPromptTemplate()

    template.render_for_user("Andel", "Ann")
    prompt = template.render_anonymous("Andel")

    assert "Ann" not in prompt
    assert ANONYMOUS_DESCRIPTION in prompt
    assert template.template == CHEF_SYSTEM_PROMPT


def test_slots_match_case_insensitively():
    template = SystemPromptTemplate("Hello [[USER_NAME]] and [[user_name]], I am [[chef_name]].")

    assert template.render(chef_name="Andel", user_name="Ann") == "Hello Ann and Ann, I am Andel."


def test_values_are_inserted_literally():
    template = SystemPromptTemplate("Hi [[user_name]].")

    assert template.render(user_name=r"A\1 \g<0>") == r"Hi A\1 \g<0>."


def test_render_for_user():
    prompt = SystemPromptTemplate().render_for_user("Andel", "Ann")

    assert "The user's name is Ann." in prompt
    assert "[[" not in prompt


def test_ingredient_names_prompt_lists_every_item():
    prompt = ingredient_names_prompt(["2 cups of flour", "3 eggs"])

    assert "- 2 cups of flour\n- 3 eggs" in prompt
    assert '"plural"' in prompt


def test_find_recipe_prompt():
    prompt = find_recipe_prompt(["egg", "milk"])

    assert prompt.startswith("What can I make with these ingredients: egg, milk.")
    assert "JSON array" in prompt
