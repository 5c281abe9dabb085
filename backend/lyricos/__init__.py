from lyricos.syllables import count_line_syllables, count_syllables, count_hindi_syllables

__all__ = ["count_line_syllables", "count_syllables", "count_hindi_syllables"]
