import unittest

from userdata.validation import ValidationError, is_blank, validate_email, validate_table_name, validate_user_fields


class ValidationTest(unittest.TestCase):
    def test_blank_table_names_are_rejected(self):
        for name in ("", "   ", None, "\t\n"):
            with self.assertRaises(ValidationError) as ctx:
                validate_table_name(name)
            self.assertIn("nombre", ctx.exception.errors)

    def test_table_name_is_stripped(self):
        self.assertEqual(validate_table_name("  Clientes  "), "Clientes")

    def test_long_table_name_is_rejected(self):
        with self.assertRaises(ValidationError):
            validate_table_name("x" * 71)
        self.assertEqual(validate_table_name("x" * 70), "x" * 70)

    def test_email_pattern(self):
        for good in ("ana@example.com", "a.b-c_d@mail.example.org", "x@y.io"):
            self.assertTrue(validate_email(good), good)
        for bad in ("", "ana", "ana@", "@example.com", "ana@example", "ana example@x.com", None):
            self.assertFalse(validate_email(bad), bad)

    def test_is_blank(self):
        self.assertTrue(is_blank(None))
        self.assertTrue(is_blank("  "))
        self.assertFalse(is_blank("0"))

    def test_user_fields_image_is_optional(self):
        fields = validate_user_fields({
            "nombres": " Ana ", "apellidos": "Pérez", "email": "ana@example.com",
        })
        self.assertEqual(fields, {
            "nombres": "Ana", "apellidos": "Pérez", "email": "ana@example.com", "imgUrl": "",
        })

    def test_user_fields_report_every_error(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_user_fields({"nombres": "", "apellidos": "", "email": "nope"})
        self.assertEqual(set(ctx.exception.errors), {"nombres", "apellidos", "email"})


if __name__ == "__main__":
    unittest.main()
