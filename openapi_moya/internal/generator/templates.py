class Templates:
    """Шаблоны статических файлов"""

    header = [
        "Generated by openapi-moya. Do not edit.",
    ]

    support = """public enum ResponseDecodeError: Error {
    case unknownCode(Int)
}

/// Произвольное JSON значение
public enum AnyObjectValue: Codable, Equatable {
    case string(String)
    case int(Int)
    case double(Double)
    case bool(Bool)
    case object([String: AnyObjectValue])
    case array([AnyObjectValue])
    case null

    public init(from decoder: Decoder) throws {
        let container = try decoder.singleValueContainer()
        if container.decodeNil() {
            self = .null
        } else if let value = try? container.decode(Bool.self) {
            self = .bool(value)
        } else if let value = try? container.decode(Int.self) {
            self = .int(value)
        } else if let value = try? container.decode(Double.self) {
            self = .double(value)
        } else if let value = try? container.decode(String.self) {
            self = .string(value)
        } else if let value = try? container.decode([AnyObjectValue].self) {
            self = .array(value)
        } else {
            self = .object(try container.decode([String: AnyObjectValue].self))
        }
    }

    public func encode(to encoder: Encoder) throws {
        var container = encoder.singleValueContainer()
        switch self {
        case .string(let value): try container.encode(value)
        case .int(let value): try container.encode(value)
        case .double(let value): try container.encode(value)
        case .bool(let value): try container.encode(value)
        case .object(let value): try container.encode(value)
        case .array(let value): try container.encode(value)
        case .null: try container.encodeNil()
        }
    }
}

/// Файл для multipart загрузки
public struct FileValue: Codable {
    public let data: Data
    public let fileName: String
    public let mimeType: String

    public init(data: Data, fileName: String, mimeType: String = "application/octet-stream") {
        self.data = data
        self.fileName = fileName
        self.mimeType = mimeType
    }

    public func moyaFormData(name: String) -> MultipartFormData {
        return MultipartFormData(provider: .data(data), name: name, fileName: fileName, mimeType: mimeType)
    }
}

public extension Dictionary where Key == String, Value == Any? {
    /// Убирает отсутствующие значения
    func unopt() -> [String: Any] {
        return compactMapValues { $0 }
    }

    func unoptString() -> [String: String] {
        return compactMapValues { $0.map { String(describing: $0) } }
    }
}

public extension JSONDecoder {
    func decodeSafe<T: Decodable>(_ type: T.Type, from data: Data) throws -> T {
        if type == String.self, let text = String(data: data, encoding: .utf8),
           (try? decode(String.self, from: data)) == nil {
            return text as! T
        }
        return try decode(type, from: data)
    }
}"""


templates = Templates()
