from tabulate import tabulate

from .probability import ProbabilityCalculator, ProbabilityMatrix


# ==============================================================================
# Help Table Generation
# ==============================================================================

class HelpTableGenerator:
    @staticmethod
    def generate_table(probabilities: ProbabilityMatrix) -> str:
        headers = ["User dice v"] + [str(d) for d in probabilities.dice]
        table_data = [
            [str(user_die)] + [str(cell) for cell in row]
            for user_die, row in zip(probabilities.dice, probabilities.rows)
        ]

        intro = (
            "\nProbability of the win for the user:\n"
            "Rows are the user's die, columns are the computer's die.\n"
            "Ties count for neither side; the diagonal is never played.\n"
        )
        return intro + tabulate(
            table_data, headers=headers, tablefmt="grid", disable_numparse=True
        )

    @staticmethod
    def for_dice(dice) -> str:
        return HelpTableGenerator.generate_table(ProbabilityCalculator.matrix(list(dice)))
