FEATURE_SIMPLE = '''Feature: Sample
  Scenario: Works
    Given a precondition
    When an action occurs
    Then an outcome is observed
'''

FEATURE_TAGGED = '''@smoke @fast @smoke
Feature: Tagged
  @wip
  Scenario Outline: Outline
    Given I have <count> items

    @examples-tag
    Examples:
      | count |
      | 1     |
      | 2     |

  Scenario: Second
    Given something
'''

FEATURE_EVERYTHING = '''Feature: Everything
  Background:
    Given a logged in user
    And an empty cart

  Scenario: Add items
    When I add the following items
      | name  | price |
      | apple | 1.50  |
      | pear  | 2.00  |
    Then the cart contains
      """
      apple
        pear

      done
      """
    But nothing else
'''

FEATURE_DESCRIBED = '''Feature: Described
  This is a description
    with an indented line

  # a comment
  and a last line
  Scenario: Only
    Given a step
'''

FEATURE_NO_KEYWORD = '''Scenario: Works
  Given a precondition
'''
